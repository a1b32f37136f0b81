"""
OPML export.

Renders configured feeds into an OPML subscription list that podcast
clients can import.
"""

import io
import logging
import re
from typing import Iterable
from xml.etree import ElementTree as ET

from ..config import FeedConfig
from .context import Context
from .errors import ExportCancelled, ExportError, ExportFailure
from .interfaces import DownloadURLBuilder, FeedLookup

logger = logging.getLogger(__name__)

OPML_VERSION = "1.0"
DEFAULT_TITLE = "Podcast feeds"

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def xml_safe(value):
    """Replace characters XML 1.0 cannot represent with U+FFFD."""
    if not isinstance(value, str):
        return value
    return _INVALID_XML_CHARS.sub("\ufffd", value)


def feed_filename(feed_id: str) -> str:
    """Name of the rendered feed file for a feed id."""
    return f"{feed_id}.xml"


def build_opml(
    ctx: Context,
    feeds: Iterable[FeedConfig],
    lookup: FeedLookup,
    url_builder: DownloadURLBuilder,
    title: str = DEFAULT_TITLE,
) -> str:
    """
    Generate an OPML document for the feeds flagged for export.

    Every feed is looked up, in order, even when it is not exported. The first
    failure aborts the export and nothing is returned.

    Args:
        ctx: Cancellation context passed to every collaborator call.
        feeds: Feed configurations in export order.
        lookup: Source of stored feed titles and descriptions.
        url_builder: Builds the download URL of each rendered feed.
        title: OPML document title.

    Returns:
        OPML XML string.

    Raises:
        ExportError: If a lookup, URL build or serialization fails.
        ExportCancelled: If the context is cancelled between feeds.
    """
    opml = ET.Element("opml", version=OPML_VERSION)

    head = ET.SubElement(opml, "head")
    title_elem = ET.SubElement(head, "title")
    title_elem.text = xml_safe(title)

    body = ET.SubElement(opml, "body")

    count = 0
    for feed in feeds:
        ctx.check()

        try:
            record = lookup.get_feed(ctx, feed.id)
        except ExportCancelled:
            raise
        except Exception as e:
            logger.error(f"Failed to look up feed {feed.id!r}: {e}")
            raise ExportError(ExportFailure.FEED_LOOKUP_FAILED, feed.id) from e

        if not feed.opml:
            logger.debug(f"Skipping feed {feed.id!r}, not flagged for OPML")
            continue

        try:
            download_url = url_builder.url(ctx, "", feed_filename(feed.id))
        except ExportCancelled:
            raise
        except Exception as e:
            logger.error(f"Failed to get feed URL for {feed.id!r}: {e}")
            raise ExportError(ExportFailure.URL_BUILD_FAILED, feed.id) from e

        ET.SubElement(
            body,
            "outline",
            type="rss",
            text=xml_safe(record.description),
            title=xml_safe(record.title),
            xmlUrl=xml_safe(download_url),
        )
        count += 1

    try:
        tree = ET.ElementTree(opml)
        ET.indent(tree, space="  ")

        output = io.BytesIO()
        tree.write(output, encoding="utf-8", xml_declaration=True)
        document = output.getvalue().decode("utf-8")
    except (TypeError, ValueError) as e:
        raise ExportError(ExportFailure.SERIALIZATION_FAILED) from e

    logger.info(f"Exported {count} feeds to OPML")
    return document
