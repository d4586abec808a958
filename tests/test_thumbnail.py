# tests/test_thumbnail.py
from services.extractor.thumbnail import resolve_thumbnail

BASE = "https://example.com/blog/post"


def test_og_image_first(rules, soup_of):
    soup = soup_of(
        """
        <html><head>
          <meta property="og:image" content="https://cdn.example.com/og.jpg">
          <meta name="twitter:image" content="https://cdn.example.com/tw.jpg">
        </head><body><article><img src="/inline.jpg"></article></body></html>
        """
    )
    assert resolve_thumbnail(soup, BASE, rules) == "https://cdn.example.com/og.jpg"


def test_twitter_image_is_resolved(rules, soup_of):
    soup = soup_of('<html><head><meta name="twitter:image" content="/media/tw.jpg"></head></html>')
    assert resolve_thumbnail(soup, BASE, rules) == "https://example.com/media/tw.jpg"


def test_article_image_then_featured_then_content(rules, soup_of):
    article = soup_of('<body><div id="content"><img src="c.jpg"></div><article><img src="/a.jpg"></article></body>')
    featured = soup_of('<body><div class="featured-image"><img src="/f.jpg"></div><div id="content"><img src="/c.jpg"></div></body>')
    content = soup_of('<body><div id="content"><img src="pics/c.jpg"></div></body>')

    assert resolve_thumbnail(article, BASE, rules) == "https://example.com/a.jpg"
    assert resolve_thumbnail(featured, BASE, rules) == "https://example.com/f.jpg"
    assert resolve_thumbnail(content, BASE, rules) == "https://example.com/blog/pics/c.jpg"


def test_image_without_src_moves_to_next_source(rules, soup_of):
    soup = soup_of('<body><article><img alt="lazy"></article><div class="featured-image"><img src="/f.jpg"></div></body>')
    assert resolve_thumbnail(soup, BASE, rules) == "https://example.com/f.jpg"


def test_no_image_means_none(rules, soup_of):
    soup = soup_of("<html><body><article><p>words only</p></article></body></html>")
    assert resolve_thumbnail(soup, BASE, rules) is None


def test_unresolvable_value_means_none(rules, soup_of):
    soup = soup_of('<html><head><meta property="og:image" content="javascript:void(0)"></head></html>')
    assert resolve_thumbnail(soup, BASE, rules) is None


def test_thumbnail_reads_uncleaned_document(rules, soup_of):
    # The image sits in a region the content cleaner would strip
    soup = soup_of('<body><article><div class="promo-box"><img src="/hero.jpg"></div></article></body>')
    assert resolve_thumbnail(soup, BASE, rules) == "https://example.com/hero.jpg"
