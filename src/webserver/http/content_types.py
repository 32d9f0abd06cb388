"""
=============================================================================
CONTENT TYPE INFERENCE FOR STATIC FILES
=============================================================================

Static files are labelled by a plain SUBSTRING search on the file path,
not by looking at the final extension:

    ┌──────────────────────────────┬───────────────────────────────┐
    │ Path contains                │ Content-Type                  │
    ├──────────────────────────────┼───────────────────────────────┤
    │ ".png"  (checked first)      │ images/png                    │
    │ ".html" (checked second)     │ txt/html                      │
    │ neither                      │ application/octet-stream      │
    └──────────────────────────────┴───────────────────────────────┘

Consequences worth knowing:

    static/rex.png          → images/png
    static/page.html        → txt/html
    static/a.png.html       → images/png     (.png wins, checked first)
    static/x.pngfoo         → images/png     (substring, not extension)
    static/style.css        → application/octet-stream

The labels "images/png" and "txt/html" are NOT registered media types.
Existing clients of this server may depend on them, so they are the
default. Pass standard=True (ServerConfig.standard_content_types) to get
"image/png" and "text/html" instead.

=============================================================================
"""

# Legacy labels, kept byte-for-byte
PNG_LABEL = "images/png"
HTML_LABEL = "txt/html"

# Registered media types, opt-in
PNG_MEDIA_TYPE = "image/png"
HTML_MEDIA_TYPE = "text/html"

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Content types of the server-generated bodies
TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"


def infer_content_type(path: str, standard: bool = False) -> str:
    """
    Pick the Content-Type for a static file path.

    Args:
        path: The requested file path (the static handler passes the URL
              remainder, e.g. "/images/rex.png").
        standard: Emit registered media types instead of the legacy labels.

    Returns:
        Content-Type header value.

    Examples:
        >>> infer_content_type("static/images/rex.png")
        'images/png'
        >>> infer_content_type("static/index.html", standard=True)
        'text/html'
        >>> infer_content_type("static/notes.txt")
        'application/octet-stream'
    """
    if ".png" in path:
        return PNG_MEDIA_TYPE if standard else PNG_LABEL
    if ".html" in path:
        return HTML_MEDIA_TYPE if standard else HTML_LABEL
    return DEFAULT_CONTENT_TYPE
