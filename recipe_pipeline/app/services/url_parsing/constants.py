"""Selector and phrase lists used when isolating recipe content from HTML."""

# Removed from the document before content extraction.
UNWANTED_SELECTORS = [
    "script",
    "style",
    "noscript",
    "link",
    "meta",
    "iframe",
    "header",
    "footer",
    "nav",
    "aside",
    "form",
    "img",
    ".sidebar",
    ".comments",
    ".advertisement",
    ".social-share",
    ".related-posts",
    ".popup",
    ".modal",
    ".newsletter",
    ".breadcrumb",
    ".pagination",
    ".widget",
    ".banner",
    ".cookie-notice",
    ".notification",
    ".alert",
    ".search",
    ".toolbar",
    ".skiplink",
    ".skip-link",
    "[class*='menu']",
    "[class*='nav']",
    "[class*='share']",
    "[class*='print']",
    "[class*='save']",
    "[class*='rating']",
    "[class*='comment']",
    "[class*='author']",
    "[class*='sidebar']",
    "[class*='widget']",
    "[class*='cookie']",
    "[class*='ad-']",
    "[id*='ad-']",
    "[id*='cookie']",
    "[aria-hidden='true']",
    "[role='banner']",
    "[role='navigation']",
    "[role='complementary']",
]

# First match wins, in document order.
MAIN_CONTENT_SELECTORS = [
    "main",
    "article",
    ".content",
    ".post-content",
    ".entry-content",
    "[class*='content']",
    "[class*='article']",
    ".post-body",
    ".entry",
    "#main-content",
    ".main-content",
]

BOILERPLATE_PHRASES = [
    "advertisement",
    "subscribe to our newsletter",
    "share this recipe",
    "print recipe",
    "save recipe",
]

MIN_LINE_LENGTH = 10
