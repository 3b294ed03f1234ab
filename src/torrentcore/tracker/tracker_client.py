import logging
from typing import List

from ..exceptions import InvalidAnnounceUrl
from .http_tracker import DEFAULT_PORT, build_tracker_url, parse_announce_url

logger = logging.getLogger(__name__)

HTTP_SCHEMES = ("http", "https")


class TrackerClient:
    """Builds announce request URLs for every HTTP tracker of a torrent."""

    def __init__(self, torrent, peer_id: bytes, port=DEFAULT_PORT):
        self.torrent = torrent
        self.peer_id = peer_id
        self.port = port

    def tracker_urls(self) -> List[str]:
        """Announce URL first, then announce-list tiers in order, deduplicated."""
        urls = [self.torrent.announce]
        for tier in getattr(self.torrent, "announce_list", ()):
            urls.extend(tier)

        seen = set()
        unique = []
        for url in urls:
            if url not in seen:
                seen.add(url)
                unique.append(url)
        return unique

    def announce_urls(self) -> List[str]:
        result = []
        for url in self.tracker_urls():
            try:
                scheme = parse_announce_url(url).scheme.lower()
            except InvalidAnnounceUrl:
                if url == self.torrent.announce:
                    raise
                logger.warning("[Tracker] Skipping unparsable tracker %r", url)
                continue

            if scheme not in HTTP_SCHEMES:
                logger.debug("[Tracker] Skipping %s tracker %s", scheme, url)
                continue

            result.append(build_tracker_url(self.torrent, self.peer_id, self.port, url=url))
        return result
