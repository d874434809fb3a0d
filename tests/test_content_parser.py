import json

import pytest

from recipe_pipeline.app.core.errors import NoContentFoundError, ParseError
from recipe_pipeline.app.services.url_parsing.content_parser import ContentParser
from recipe_pipeline.app.services.url_parsing.parsing_utils import clean_extracted_content

RECIPE_LD = json.dumps(
    {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": "Lemon Bars",
        "recipeIngredient": ["1 cup flour", "2 lemons"],
    }
)


def test_first_recipe_json_ld_block_is_returned_verbatim():
    org_ld = json.dumps({"@type": "Organization", "name": "Food Co"})
    other_ld = json.dumps({"@type": "Recipe", "name": "Other"})
    html = f"""
    <html>
      <head>
        <script type="application/ld+json">{org_ld}</script>
        <script type="application/ld+json">{RECIPE_LD}</script>
        <script type="application/ld+json">{other_ld}</script>
      </head>
      <body><article>Some long article text that is ignored here.</article></body>
    </html>
    """
    assert ContentParser().parse(html) == RECIPE_LD


def test_article_text_is_cleaned():
    html = """
    <html>
      <head><title>Soup</title><style>.x { color: red; }</style></head>
      <body>
        <header>Site Header Navigation Links</header>
        <article>
          <h1>Grandma's Tomato Soup</h1>
          <p>Simmer the tomatoes   gently for twenty minutes.</p>
          <button>Print</button>
          <p>Share this recipe with friends and family today</p>
          <!-- a comment that should never appear -->
          <p>Jump</p>
        </article>
        <footer>Copyright 2024 Food Co</footer>
      </body>
    </html>
    """
    assert ContentParser().parse(html) == (
        "Grandma's Tomato Soup\n\n"
        "Simmer the tomatoes gently for twenty minutes.\n\n"
        "with friends and family today"
    )


def test_page_chrome_removed_when_falling_back_to_body():
    html = """
    <html><body>
      <nav>Home About Contact Recipes</nav>
      <div class="sidebar">Popular posts you might like</div>
      <div id="recipe"><p>Whisk the eggs with the sugar until pale.</p></div>
      <div class="cookie-notice">We use cookies to improve things</div>
      <div aria-hidden="true">Hidden decorative text content</div>
      <div role="complementary">Related reading for later</div>
      <footer>Copyright 2024 Food Co and friends</footer>
    </body></html>
    """
    assert ContentParser().parse(html) == "Whisk the eggs with the sugar until pale."


def test_main_element_preferred_over_rest_of_page():
    html = """
    <html><body>
      <div>Unrelated introduction paragraph text</div>
      <main><p>Fold the batter into the prepared tin.</p></main>
    </body></html>
    """
    assert ContentParser().parse(html) == "Fold the batter into the prepared tin."


def test_outermost_content_container_wins():
    html = """
    <html><body>
      <div class="recipe-content">
        <p>Outer intro paragraph about the dish.</p>
        <article><p>Whisk the eggs with sugar until pale.</p></article>
      </div>
    </body></html>
    """
    assert ContentParser().parse(html) == (
        "Outer intro paragraph about the dish.\n\nWhisk the eggs with sugar until pale."
    )


def test_page_without_usable_text_raises():
    html = "<html><body><nav>Menu links here</nav><p>Hi</p></body></html>"
    with pytest.raises(NoContentFoundError) as excinfo:
        ContentParser().parse(html)
    assert isinstance(excinfo.value, ParseError)


def test_non_text_input_raises_parse_error():
    with pytest.raises(ParseError):
        ContentParser().parse(None)


def test_clean_extracted_content():
    raw = "ADVERTISEMENT\n\nPreheat the oven to 200C.\nok\n\n\n\n\nPrint Recipe Bake for 25 minutes please"
    assert clean_extracted_content(raw) == "Preheat the oven to 200C.\n\nBake for 25 minutes please"
