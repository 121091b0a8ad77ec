from mise_recipes.app.services.url_parsing.extractors.readability_fallback import (
    extract_recipe_from_readability,
    likely_ingredient,
    likely_instruction,
    normalize_list_line,
)

ARTICLE = """
<html><head><title>Weeknight Tomato Pasta | Example Kitchen</title></head><body>
<nav><a href="/">Home</a> <a href="/about">About</a></nav>
<article>
<h1>Weeknight Tomato Pasta</h1>
<p>This weeknight tomato pasta comes together in twenty minutes with pantry staples, and it is the dinner
we make most often when time is short and everyone at the table is hungry.</p>
<img src="https://cdn.example.com/pasta.jpg">
<h2>Ingredients</h2>
<ul>
<li>400 g spaghetti</li>
<li>2 tbsp olive oil</li>
<li>3 garlic cloves</li>
<li>1 can crushed tomatoes</li>
</ul>
<h2>Method</h2>
<ol>
<li>Cook the spaghetti in salted water until al dente.</li>
<li>Heat the oil and cook the garlic until fragrant.</li>
<li>Add the tomatoes and simmer for ten minutes, then toss with the pasta.</li>
</ol>
</article>
<footer>Copyright Example Kitchen</footer>
</body></html>
"""


def test_line_heuristics():
    assert normalize_list_line("- 2 cups flour") == "2 cups flour"
    assert normalize_list_line("3) Stir well") == "Stir well"
    assert likely_ingredient("2 cups flour")
    assert likely_ingredient("salt, 1 pinch")
    assert not likely_ingredient("Stir well")
    assert likely_instruction("Stir well")
    assert likely_instruction("1. Leave overnight")
    assert not likely_instruction("Fresh parsley")


def test_extracts_article_recipe():
    draft = extract_recipe_from_readability(ARTICLE, "https://example.com/pasta")
    assert draft is not None
    assert "Weeknight Tomato Pasta" in draft.title
    assert "400 g spaghetti" in draft.ingredients
    assert len(draft.ingredients) >= 2
    assert len(draft.instructions) >= 2
    assert "Cook the spaghetti in salted water until al dente." in draft.instructions


def test_empty_html():
    assert extract_recipe_from_readability("", "https://example.com") is None
    assert extract_recipe_from_readability("   ", "https://example.com") is None
