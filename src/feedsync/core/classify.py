"""Resolve provider links into feed sources."""

import logging
import re
from typing import Optional, Tuple
from urllib.parse import SplitResult, parse_qs, urlsplit

from ..config import ClassificationConfig
from .errors import ClassificationError, ClassificationFailure
from .models import LinkType, Provider, ResolvedSource

# A percent sign must start a two digit hex escape
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Characters allowed in a host, IPv6 literals included
_HOST_CHARS = re.compile(r"[A-Za-z0-9.\-_~!$&'()*+,;=%:]*")


def path_segment(path: str, index: int) -> Optional[str]:
    """
    Return the path segment at the given depth.

    The path is split on '/', so for '/channel/UC123' index 0 is the empty
    string before the leading slash, 1 is 'channel' and 2 is 'UC123'.

    Args:
        path: Escaped URL path
        index: Segment position

    Returns:
        The segment, or None if the path is too short or the segment is empty
    """
    parts = path.split("/")
    if len(parts) <= index:
        return None
    return parts[index] or None


class SourceClassifier:
    """Classifies web addresses as YouTube or Vimeo feed sources."""

    def __init__(self, config: Optional[ClassificationConfig] = None):
        """
        Initialize the classifier.

        Args:
            config: Classification configuration, defaults if omitted
        """
        self.config = config or ClassificationConfig()

    def classify(self, address: str) -> ResolvedSource:
        """
        Resolve an address into provider, link type and item id.

        Args:
            address: Link as typed by the user, scheme optional

        Returns:
            ResolvedSource for the link

        Raises:
            ClassificationError: If the link is malformed, on an unsupported
                host, or missing the id its link type requires
        """
        link = address.strip()
        if not link.startswith("http"):
            link = f"{self.config.default_scheme}://{link}"

        parsed = self._parse(link, address)
        host = parsed.hostname or ""

        if host.endswith(self.config.youtube_domain):
            provider = Provider.YOUTUBE
            link_type, item_id = self._parse_youtube(parsed, address)
        elif host.endswith(self.config.vimeo_domain):
            provider = Provider.VIMEO
            link_type, item_id = self._parse_vimeo(parsed, address)
        else:
            raise ClassificationError(ClassificationFailure.UNSUPPORTED_HOST, address)

        source = ResolvedSource(provider=provider, link_type=link_type, item_id=item_id)
        logging.debug(f"Classified {address} as {source}")
        return source

    def _parse(self, link: str, address: str) -> SplitResult:
        """Split a normalized link, rejecting ones that are not valid URLs."""
        if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in link):
            raise ClassificationError(ClassificationFailure.MALFORMED_URL, address)

        if _BAD_ESCAPE.search(link):
            raise ClassificationError(ClassificationFailure.MALFORMED_URL, address)

        try:
            parsed = urlsplit(link)
            # Port is validated lazily
            parsed.port
        except ValueError as e:
            raise ClassificationError(ClassificationFailure.MALFORMED_URL, address) from e

        if not _HOST_CHARS.fullmatch(parsed.hostname or ""):
            raise ClassificationError(ClassificationFailure.MALFORMED_URL, address)

        return parsed

    def _parse_youtube(self, parsed: SplitResult, address: str) -> Tuple[LinkType, str]:
        path = parsed.path

        # https://www.youtube.com/playlist?list=PLCB9F975ECF01953C
        # https://www.youtube.com/watch?v=rbCbho7aLYw&list=PLMpEfaKcGjpWEgNtdnsvLX6LzQL0UC0EM
        if path.startswith("/playlist") or path.startswith("/watch"):
            values = parse_qs(parsed.query, keep_blank_values=True).get("list") or [""]
            if not values[0]:
                raise ClassificationError(ClassificationFailure.INVALID_PLAYLIST_LINK, address)
            return LinkType.PLAYLIST, values[0]

        # https://www.youtube.com/channel/UC5XPnUk8Vvv_pWslhwom6Og
        # https://www.youtube.com/channel/UCrlakW-ewUT8sOod6Wmzyow/videos
        if path.startswith("/channel"):
            item_id = path_segment(path, 2)
            if item_id is None:
                raise ClassificationError(ClassificationFailure.INVALID_CHANNEL_LINK, address)
            return LinkType.CHANNEL, item_id

        # https://www.youtube.com/user/fxigr1
        if path.startswith("/user"):
            item_id = path_segment(path, 2)
            if item_id is None:
                raise ClassificationError(ClassificationFailure.INVALID_USER_LINK, address)
            return LinkType.USER, item_id

        raise ClassificationError(ClassificationFailure.UNSUPPORTED_LINK_FORMAT, address)

    def _parse_vimeo(self, parsed: SplitResult, address: str) -> Tuple[LinkType, str]:
        path = parsed.path

        if len(path.split("/")) < 2:
            raise ClassificationError(ClassificationFailure.INVALID_PATH, address)

        section = path_segment(path, 1)

        # https://vimeo.com/groups/motion
        # https://vimeo.com/channels/staffpicks
        if section in ("groups", "channels"):
            link_type = LinkType.GROUP if section == "groups" else LinkType.CHANNEL
            item_id = path_segment(path, 2)
            if item_id is None:
                raise ClassificationError(ClassificationFailure.INVALID_CHANNEL_LINK, address)
            return link_type, item_id

        # https://vimeo.com/fxigr1
        if section is None:
            raise ClassificationError(ClassificationFailure.INVALID_ID, address)
        return LinkType.USER, section


_default_classifier = SourceClassifier()


def classify(address: str) -> ResolvedSource:
    """Classify an address with the default classifier."""
    return _default_classifier.classify(address)
