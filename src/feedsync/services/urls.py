"""Download URLs of rendered feed files."""

import posixpath
from urllib.parse import quote

from ..core.context import Context


class HostURLBuilder:
    """Builds download URLs below the public server hostname."""

    def __init__(self, hostname: str):
        self.hostname = hostname.rstrip("/")

    def url(self, ctx: Context, namespace: str, filename: str) -> str:
        """
        Build the download URL of a file.

        Args:
            ctx: Cancellation context
            namespace: Optional directory the file lives in, may be empty
            filename: File name, e.g. "<feed id>.xml"

        Returns:
            Absolute URL of the file

        Raises:
            ValueError: If the hostname or filename is empty
        """
        ctx.check()

        if not self.hostname:
            raise ValueError("server hostname is not configured")
        if not filename:
            raise ValueError("filename must not be empty")

        path = posixpath.join(namespace.strip("/"), filename) if namespace else filename
        return f"{self.hostname}/{quote(path)}"
