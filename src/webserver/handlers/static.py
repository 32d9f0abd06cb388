"""
=============================================================================
STATIC FILE HANDLER
=============================================================================

Serves files from a base directory (default "static/", relative to the
process working directory).

=============================================================================
URL → FILE MAPPING
=============================================================================

The "/static" prefix is stripped and the REMAINDER is appended to the
base directory as a plain string:

    URL path                  Remainder            File opened
    ──────────────────────    ─────────────────    ──────────────────────
    /static/index.html        /index.html          static//index.html
    /static/images/rex.png    /images/rex.png      static//images/rex.png
    /staticfoo                foo                  static/foo
    /static                   (empty)              static/  → directory → 404

The doubled slash is harmless on POSIX. No URL decoding is done:
"/static/a%20b" opens a file literally named "a%20b".

=============================================================================
FLOW
=============================================================================

    1. Build the path as above
    2. Confinement check (unless disabled): resolved path must stay inside
       the base directory, else not found
    3. open() for reading; ANY failure → not found
       (missing, permission denied, is a directory, embedded NUL byte)
    4. Size from fstat(), whole file read into memory
    5. Content-Type by substring search (see http/content_types.py)

Every failure is a SOFT failure: a 200 response with the not-found page.

=============================================================================
PATH TRAVERSAL
=============================================================================

With confine=False the handler opens whatever the joined path points at:

    GET /static/../secrets.txt   →   static//../secrets.txt   → served!

With confine=True (the default) the joined path is resolved (following
".." and symlinks) and must remain under the resolved base directory:

    (base / remainder).resolve().relative_to(base.resolve())
                                 ─────────────────────────────
                                 ValueError → not found

=============================================================================
"""

import os
import logging
from pathlib import Path

from ..http.request import Request
from ..http.response import Response, file_response, not_found
from ..http.content_types import infer_content_type


logger = logging.getLogger(__name__)


class StaticFileHandler:
    """
    Handler for GET /static... requests.

    Usage:
        static = StaticFileHandler("static/")
        router.add_route("/static", static.handle)
    """

    def __init__(
        self,
        root_dir: str = "static/",
        url_prefix: str = "/static",
        confine: bool = True,
        standard_content_types: bool = False,
    ):
        """
        Initialize the static file handler.

        Args:
            root_dir: Base directory. A trailing separator is added if
                      missing so that "/staticfoo" still lands inside it.
            url_prefix: Literal prefix stripped from the URL path.
            confine: Refuse paths that resolve outside root_dir.
            standard_content_types: Emit image/png and text/html instead of
                                    the legacy labels.
        """
        if not root_dir.endswith(("/", os.sep)):
            root_dir += "/"
        self.root_dir = root_dir
        self.url_prefix = url_prefix
        self.confine = confine
        self.standard_content_types = standard_content_types

    def _remainder(self, url_path: str) -> str:
        if url_path.startswith(self.url_prefix):
            return url_path[len(self.url_prefix):]
        return url_path

    def resolve(self, url_path: str) -> str:
        """Map a URL path to the filesystem path that will be opened."""
        return self.root_dir + self._remainder(url_path)

    def _is_confined(self, file_path: str) -> bool:
        root = Path(self.root_dir).resolve()
        try:
            Path(file_path).resolve().relative_to(root)
        except ValueError:
            return False
        return True

    def handle(self, request: Request) -> Response:
        """
        Serve the file named by the request path.

        Returns:
            The file with its inferred content type, or the not-found page.
        """
        file_path = self.resolve(request.path)

        try:
            if self.confine and not self._is_confined(file_path):
                logger.warning(f"Path traversal attempt: {request.path!r}")
                return not_found()

            with open(file_path, "rb") as f:
                size = os.fstat(f.fileno()).st_size
                content = f.read()
        except (OSError, ValueError) as e:
            # ValueError: embedded NUL byte in the path
            logger.debug(f"Cannot serve {file_path!r}: {e}")
            return not_found()

        # "static/" holds neither ".png" nor ".html", so checking the URL
        # remainder gives the same answer as checking the joined path
        content_type = infer_content_type(
            self._remainder(request.path),
            standard=self.standard_content_types,
        )
        return file_response(content, content_type, size)
