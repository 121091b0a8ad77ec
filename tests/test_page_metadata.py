from mise_recipes.app.schemas.ingestion import PrepGroup
from mise_recipes.app.services.url_parsing.extractors.page_metadata import (
    extract_ingredient_groups_from_html,
    extract_notes_from_html,
    extract_page_metadata,
    extract_video_from_html,
)

TART_PAGE = """
<html><head>
<title>Fallback Title</title>
<meta property="og:title" content="Lemon Tart">
<meta name="Description" content="Sharp &amp; sweet.">
<meta property="og:image" content="https://cdn.example.com/tart.jpg">
<meta property="og:video" content="https://vimeo.com/998877">
</head><body>
<iframe data-src="https://www.youtube-nocookie.com/embed/tart42" src="about:blank"></iframe>
</body></html>
"""


def test_page_metadata_prefers_open_graph():
    metadata = extract_page_metadata(TART_PAGE)
    assert metadata.title == "Lemon Tart"
    assert metadata.description == "Sharp & sweet."
    assert metadata.image_url == "https://cdn.example.com/tart.jpg"
    assert metadata.video_url == "https://youtu.be/tart42"


def test_page_metadata_title_tag_fallback():
    metadata = extract_page_metadata("<html><head><title> Plain  Title </title></head><body></body></html>")
    assert metadata.title == "Plain Title"
    assert metadata.description is None
    assert metadata.image_url is None
    assert metadata.video_url is None


def test_video_falls_back_to_vimeo():
    html = '<video data-lazy-src="https://player.vimeo.com/video/4455"></video>'
    assert extract_video_from_html(html) == "https://vimeo.com/4455"


def test_video_ignores_other_hosts():
    html = '<iframe src="https://videos.example.com/embed/1"></iframe>'
    assert extract_video_from_html(html) is None


def test_notes_from_recipe_notes_container():
    html = (
        '<div class="wprm-recipe-notes-container">'
        '<div class="wprm-recipe-notes"><p>Use cold butter.</p><p>Nutrition: 300 kcal</p></div>'
        "</div>"
    )
    assert extract_notes_from_html(html) == ["Use cold butter."]


def test_notes_from_recipe_notes_heading():
    html = (
        "<h2>Method</h2><p>Bake.</p>"
        "<h3>Recipe Notes</h3><p>Keeps for 3 days.</p><p>Freeze leftovers.</p>"
        "<h2>Comments</h2><p>Nice!</p>"
    )
    assert extract_notes_from_html(html) == ["Keeps for 3 days.", "Freeze leftovers."]


def test_no_notes():
    assert extract_notes_from_html("<p>Just a story.</p>") == []


def test_wprm_ingredient_groups():
    html = """
    <div class="wprm-recipe-ingredient-group">
      <h4 class="wprm-recipe-group-name">For the crust:</h4>
      <ul>
        <li class="wprm-recipe-ingredient">200 g flour</li>
        <li class="wprm-recipe-ingredient">100 g   butter</li>
      </ul>
    </div>
    <div class="wprm-recipe-ingredient-group">
      <ul><li class="wprm-recipe-ingredient">1 egg</li></ul>
    </div>
    """
    assert extract_ingredient_groups_from_html(html) == [
        PrepGroup(title="For the crust", items=["200 g flour", "100 g butter"])
    ]


def test_notes_ignore_scripts_and_markup_in_attributes():
    html = (
        '<div class="recipe-notes">'
        '<p>Keep <span title="a > b">cold</span>.</p>'
        "<script>var x=1;</script><style>.a{color:red}</style>"
        "<ul><li>Chill<br>overnight</li></ul>"
        "</div>"
    )
    assert extract_notes_from_html(html) == ["Keep cold.", "Chill", "overnight"]
