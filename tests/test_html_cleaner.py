"""
Tests for the HTML -> text cleaner.
"""

from recipe_ingest.extraction.html_cleaner import clean_text

PAGE = (
    "<html><head><title>Soep</title><script>var tracking = 1;</script><style>.a{color:red}</style></head>"
    "<body>"
    "<nav>Menu Home Contact</nav>"
    "<header>Kookblog</header>"
    "<main>"
    "<h1>Soep</h1>"
    '<div class="recipe-header">Voor 4 personen</div>'
    "<p>Lekker&nbsp;&amp; warm</p>"
    "<!-- editor note -->"
    "<ul><li>ui</li><li>wortel</li></ul>"
    '<div class="ad-slot">Koop nu</div>'
    '<div id="cookie-banner">Accepteer cookies</div>'
    '<section class="social-share">Deel dit</section>'
    "<table><tr><td>Bereidingstijd</td><td>30 min</td></tr></table>"
    "<p>regel een<br>regel twee</p>"
    "</main>"
    "<footer>(c) 2024</footer>"
    "</body></html>"
)


def test_chrome_and_noise_are_removed():
    text = clean_text(PAGE)

    for removed in ("Menu Home", "Kookblog", "var tracking", "color:red", "Koop nu", "Accepteer", "Deel dit", "(c) 2024", "editor note"):
        assert removed not in text


def test_content_keeps_block_structure():
    text = clean_text(PAGE)

    assert text.startswith("Soep\n\n")
    assert "Voor 4 personen" in text
    assert "Lekker & warm" in text
    assert "ui\nwortel" in text
    assert "Bereidingstijd | 30 min" in text
    assert "regel een\nregel twee" in text


def test_blank_lines_are_collapsed():
    text = clean_text("<body><p>a</p><p></p><p> </p><p>b</p></body>")
    assert text == "a\n\nb"


def test_content_div_is_used_without_main_or_article():
    html = (
        "<body><div class='topbar'>Inloggen</div>"
        "<div class='recipe-content'><p>Alleen dit</p></div>"
        "<div class='related'>Meer recepten</div></body>"
    )
    assert clean_text(html) == "Alleen dit"


def test_whole_body_is_used_as_fallback():
    assert clean_text("<body><p>een</p><p>twee</p></body>") == "een\n\ntwee"


def test_empty_input():
    assert clean_text("") == ""
