import json
import logging

import httpx
import pytest

from mise_recipes.app.schemas.ingestion import IngestionErrorCode, IngestionStage, PrepGroup
from mise_recipes.app.services import url_recipe_parser
from mise_recipes.app.services.url_parsing.models import (
    InvalidSourceUrlError,
    MarkdownDocument,
    RenderedPage,
)
from mise_recipes.app.services.url_recipe_parser import ingest_recipe_from_url

TRAY_BAKE_MARKDOWN = """# Chicken Tray Bake
Everything roasts on one tray.

## Ingredients
- 8 chicken thighs
- 500 g baby potatoes
- 1 red onion, sliced
- 2 tbsp olive oil
- 1 tsp smoked paprika
- 4 garlic cloves
- 1 lemon
- 1 handful parsley

## Instructions
1. Heat the oven to 200C.
2. Toss the potatoes and onion with the oil.
3. Rub the chicken with paprika and garlic.
4. Roast everything for 45 minutes.
5. Squeeze over the lemon juice.
6. Scatter with parsley and serve.

Tags: dinner, easy
"""

TRAY_BAKE_PAGE = """
<html><head>
<meta property="og:image" content="https://cdn.example.com/tray-bake.jpg">
<script type="application/ld+json">
{"@type": "Recipe", "name": "Chicken Tray Bake", "recipeYield": "4", "prepTime": "PT15M", "cookTime": "PT45M"}
</script>
</head><body>
<iframe src="https://www.youtube.com/embed/tray99"></iframe>
</body></html>
"""

BOLOGNESE_RECIPE = {
    "@type": "Recipe",
    "name": "Spaghetti Bolognese",
    "description": "A family favourite.",
    "image": "https://cdn.example.com/bolognese.jpg",
    "recipeYield": "4 servings",
    "recipeIngredient": ["1 lb beef mince", "1 onion, diced", "400 g crushed tomatoes", "250 g spaghetti"],
    "recipeInstructions": [
        {"@type": "HowToStep", "text": "Brown the beef mince in a large pan."},
        {"@type": "HowToStep", "text": "Add the onion and cook until soft."},
        {"@type": "HowToStep", "text": "Stir in the tomatoes and simmer for 30 minutes."},
        {"@type": "HowToStep", "text": "Serve over the cooked spaghetti."},
    ],
}

BOLOGNESE_PAGE = f"""
<html><head><script type="application/ld+json">{json.dumps(BOLOGNESE_RECIPE)}</script></head><body>
<div class="wprm-recipe-ingredient-group">
  <h4 class="wprm-recipe-group-name">For the sauce:</h4>
  <ul>
    <li class="wprm-recipe-ingredient">1 lb beef mince</li>
    <li class="wprm-recipe-ingredient">1 onion, diced</li>
    <li class="wprm-recipe-ingredient">400 g crushed tomatoes</li>
  </ul>
</div>
<div class="wprm-recipe-ingredient-group">
  <h4 class="wprm-recipe-group-name">To serve</h4>
  <ul><li class="wprm-recipe-ingredient">250 g spaghetti</li></ul>
</div>
<div class="recipe-notes"><p>Use fresh basil.</p></div>
</body></html>
"""

APPLE_PIE = {
    "@type": "Recipe",
    "name": "Apple Pie",
    "description": "Classic double crust pie.",
    "recipeIngredient": ["2 sheets shortcrust pastry", "6 green apples", "100 g brown sugar", "1 tsp cinnamon"],
    "recipeInstructions": [
        "Line the pie dish with pastry.",
        "Slice the apples and toss with sugar.",
        "Fill the pie and cover with pastry.",
        "Bake for 50 minutes until golden.",
    ],
}


ARTICLE_PAGE = """
<html><head><title>Weeknight Tomato Pasta | Example Kitchen</title></head><body>
<nav><a href="/">Home</a> <a href="/about">About</a></nav>
<article>
<h1>Weeknight Tomato Pasta</h1>
<p>This weeknight tomato pasta comes together in twenty minutes with pantry staples, and it is the dinner
we make most often when time is short and everyone at the table is hungry.</p>
<h2>Ingredients</h2>
<ul>
<li>400 g spaghetti</li>
<li>2 tbsp olive oil</li>
<li>3 garlic cloves, sliced</li>
<li>1 can crushed tomatoes</li>
<li>1 tsp chilli flakes</li>
<li>20 g parmesan, grated</li>
</ul>
<h2>Method</h2>
<ol>
<li>Cook the spaghetti in salted water until al dente.</li>
<li>Heat the oil and cook the garlic until fragrant.</li>
<li>Add the tomatoes and chilli and simmer for ten minutes.</li>
<li>Toss the sauce with the pasta and serve with parmesan.</li>
</ol>
</article>
<footer>Copyright Example Kitchen</footer>
</body></html>
"""


def install_stages(monkeypatch, markdown=None, html="", html_error=None, rendered=None, render_enabled=False):
    calls = {"html_timeouts": [], "rendered": 0}

    async def fake_fetch_markdown(url):
        return markdown

    async def fake_fetch_html(url, timeout):
        calls["html_timeouts"].append(timeout)
        if html_error is not None:
            raise html_error
        return html

    async def fake_fetch_rendered_page(url):
        calls["rendered"] += 1
        return rendered

    monkeypatch.setattr(url_recipe_parser, "fetch_markdown", fake_fetch_markdown)
    monkeypatch.setattr(url_recipe_parser, "fetch_html", fake_fetch_html)
    monkeypatch.setattr(url_recipe_parser, "fetch_rendered_page", fake_fetch_rendered_page)
    monkeypatch.setattr(url_recipe_parser, "is_render_fallback_enabled", lambda: render_enabled)
    return calls


def diagnostics_records(caplog):
    return [
        json.loads(record.getMessage().split(" ", 1)[1])
        for record in caplog.records
        if record.getMessage().startswith("[recipe-ingestion]")
    ]


def http_status_error(status_code, url="https://example.com/recipe"):
    request = httpx.Request("GET", url)
    return httpx.HTTPStatusError("error", request=request, response=httpx.Response(status_code, request=request))


@pytest.mark.asyncio
async def test_high_confidence_markdown_backfills_media_from_page(monkeypatch, caplog):
    caplog.set_level(logging.INFO)
    calls = install_stages(
        monkeypatch,
        markdown=MarkdownDocument(content=TRAY_BAKE_MARKDOWN),
        html=TRAY_BAKE_PAGE,
        render_enabled=True,
    )

    outcome = await ingest_recipe_from_url("https://www.example.com/tray-bake?utm_source=feed")

    assert outcome.success
    assert outcome.stage_used == IngestionStage.MARKDOWN
    assert outcome.quality_score == 58
    recipe = outcome.recipe
    assert recipe.title == "Chicken Tray Bake"
    assert recipe.description == "Everything roasts on one tray."
    assert recipe.source_url == "https://example.com/tray-bake"
    assert recipe.image_url == "https://cdn.example.com/tray-bake.jpg"
    assert recipe.video_url == "https://youtu.be/tray99"
    assert recipe.servings == 4
    assert recipe.prep_time == 15
    assert recipe.cook_time == 45
    assert recipe.tags == ["dinner", "easy"]
    assert len(recipe.ingredients) == 8
    assert recipe.instructions[0] == "Heat the oven to 200C."
    assert recipe.prep_groups[0].title == "Slice"
    assert calls["html_timeouts"] == [6.0]
    assert calls["rendered"] == 0

    [payload] = diagnostics_records(caplog)
    assert payload["stageUsed"] == "markdown"
    assert payload["resultQualityScore"] == 58
    assert [attempt["stage"] for attempt in payload["attempts"]] == ["markdown", "http_html"]
    assert payload["selected"]["ingredients"] == 8


@pytest.mark.asyncio
async def test_html_stage_keeps_source_groups_and_converts_to_metric(monkeypatch):
    monkeypatch.setenv("INGEST_CONVERT_TO_METRIC", "true")
    calls = install_stages(monkeypatch, markdown=None, html=BOLOGNESE_PAGE)

    outcome = await ingest_recipe_from_url("https://example.com/bolognese")

    assert outcome.stage_used == IngestionStage.HTTP_HTML
    assert outcome.quality_score == 44
    assert outcome.attempts[0].error_code == IngestionErrorCode.FETCH_FAILED
    recipe = outcome.recipe
    assert recipe.title == "Spaghetti Bolognese"
    assert recipe.description == "A family favourite."
    assert recipe.servings == 4
    assert recipe.image_url == "https://cdn.example.com/bolognese.jpg"
    assert recipe.ingredients == ["454 g beef mince", "1 onion, diced", "400 g crushed tomatoes", "250 g spaghetti"]
    assert recipe.prep_groups == [
        PrepGroup(title="For the sauce", items=["454 g beef mince", "1 onion, diced", "400 g crushed tomatoes"]),
        PrepGroup(title="To serve", items=["250 g spaghetti"]),
    ]
    assert recipe.notes == ["Use fresh basil."]
    assert calls["html_timeouts"] == [10.0]


@pytest.mark.asyncio
async def test_rendered_fallback_after_blocked_fetch(monkeypatch):
    monkeypatch.setenv("INGEST_ENABLE_MARKDOWN", "false")
    rendered = RenderedPage(
        final_url="https://example.com/apple-pie",
        html="<html><head><title>Apple Pie</title></head><body></body></html>",
        json_ld=[APPLE_PIE],
    )
    calls = install_stages(monkeypatch, html_error=http_status_error(403), rendered=rendered, render_enabled=True)

    outcome = await ingest_recipe_from_url("https://example.com/apple-pie")

    assert outcome.stage_used == IngestionStage.RENDERED_HTML
    assert outcome.quality_score == 44
    assert [attempt.error_code for attempt in outcome.attempts] == [
        IngestionErrorCode.DISABLED,
        IngestionErrorCode.BLOCKED,
        None,
    ]
    assert outcome.recipe.title == "Apple Pie"
    assert outcome.recipe.instructions[1] == "Slice the apples and toss with sugar."
    assert calls["rendered"] == 1


@pytest.mark.asyncio
async def test_timeout_reports_fetch_failed(monkeypatch, caplog):
    caplog.set_level(logging.INFO)
    install_stages(monkeypatch, markdown=None, html_error=httpx.ReadTimeout("timed out"))

    outcome = await ingest_recipe_from_url("https://example.com/slow")

    assert not outcome.success
    assert outcome.failure_reason == IngestionErrorCode.FETCH_FAILED
    assert outcome.source_host == "example.com"
    assert [attempt.error_code for attempt in outcome.attempts] == [
        IngestionErrorCode.FETCH_FAILED,
        IngestionErrorCode.TIMEOUT,
    ]
    [payload] = diagnostics_records(caplog)
    assert payload["failureReason"] == "fetch_failed"
    assert payload["stageUsed"] is None


@pytest.mark.asyncio
async def test_blocked_fetch_is_reported(monkeypatch):
    install_stages(monkeypatch, markdown=None, html_error=http_status_error(429))
    outcome = await ingest_recipe_from_url("https://example.com/busy")
    assert outcome.failure_reason == IngestionErrorCode.BLOCKED


@pytest.mark.asyncio
async def test_ingredients_without_steps(monkeypatch):
    markdown = "# Mystery Cake\n## Ingredients\n- 2 cups flour\n- 1 cup sugar\n- 3 eggs\n"
    install_stages(monkeypatch, markdown=MarkdownDocument(content=markdown), html="")

    outcome = await ingest_recipe_from_url("https://example.com/cake")

    assert outcome.recipe is None
    assert outcome.failure_reason == IngestionErrorCode.INSUFFICIENT_STEPS
    assert outcome.quality_score == 7


@pytest.mark.asyncio
async def test_balanced_html_replaces_thin_markdown(monkeypatch):
    steps = "\n".join(f"{index}. Baste the lamb with the pan juices again." for index in range(1, 11))
    markdown = (
        "# Slow Roast Lamb\nSunday lunch.\n## Ingredients\n"
        "- 1 lamb shoulder\n- 2 tbsp rosemary\n- 1 garlic bulb\n"
        f"## Method\n{steps}\n"
    )
    lamb = {
        "@type": "Recipe",
        "name": "Slow Roast Lamb",
        "recipeIngredient": ["1 lamb shoulder", "2 tbsp rosemary", "1 garlic bulb", "500 ml stock"],
        "recipeInstructions": [
            "Heat the oven to 160C.",
            "Roast the lamb with stock for four hours.",
            "Rest the lamb before carving.",
        ],
    }
    page = f'<html><head><script type="application/ld+json">{json.dumps(lamb)}</script></head><body></body></html>'
    install_stages(monkeypatch, markdown=MarkdownDocument(content=markdown), html=page)

    outcome = await ingest_recipe_from_url("https://example.com/lamb")

    assert outcome.stage_used == IngestionStage.HTTP_HTML
    assert outcome.quality_score == 37
    assert len(outcome.recipe.ingredients) == 4
    assert len(outcome.recipe.instructions) == 3


@pytest.mark.asyncio
async def test_invalid_urls_raise_before_any_stage(monkeypatch):
    async def unexpected(*args, **kwargs):
        raise AssertionError("no stage should run")

    monkeypatch.setattr(url_recipe_parser, "fetch_markdown", unexpected)
    urls = (
        "ftp://example.com/recipe",
        "http://localhost/recipe",
        "http://192.168.1.20/recipe",
        "http://[::1]/recipe",
        "http://[fd00::1]/x",
        "http://169.254.169.254/latest",
        "https://",
    )
    for url in urls:
        with pytest.raises(InvalidSourceUrlError):
            await ingest_recipe_from_url(url)


@pytest.mark.asyncio
async def test_page_without_json_ld_falls_back_to_readability(monkeypatch, caplog):
    caplog.set_level(logging.INFO)
    calls = install_stages(monkeypatch, markdown=None, html=ARTICLE_PAGE)

    outcome = await ingest_recipe_from_url("https://example.com/tomato-pasta")

    assert outcome.success
    assert outcome.stage_used == IngestionStage.READABILITY
    assert outcome.quality_score >= 35
    html_attempt, readability_attempt = outcome.attempts[-2:]
    assert html_attempt.stage == IngestionStage.HTTP_HTML
    assert html_attempt.error_code == IngestionErrorCode.PARSE_FAILED
    assert readability_attempt.stage == IngestionStage.READABILITY
    assert readability_attempt.success
    assert calls["rendered"] == 0

    recipe = outcome.recipe
    assert "Weeknight Tomato Pasta" in recipe.title
    assert "400 g spaghetti" in recipe.ingredients
    assert "Cook the spaghetti in salted water until al dente." in recipe.instructions
    assert len(diagnostics_records(caplog)) == 1
