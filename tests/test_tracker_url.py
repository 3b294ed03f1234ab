import pytest

from torrentcore.exceptions import InvalidAnnounceUrl
from torrentcore.torrent import TorrentFile
from torrentcore.tracker.http_tracker import build_tracker_url
from torrentcore.tracker.utils import percent_encode

INFO_HASH = bytes(range(1, 21))
PEER_ID = bytes([68] * 20)

EXPECTED_QUERY = (
    "info_hash=%01%02%03%04%05%06%07%08%09%0A%0B%0C%0D%0E%0F%10%11%12%13%14"
    "&peer_id=DDDDDDDDDDDDDDDDDDDD"
    "&port=6881&uploaded=0&downloaded=0&compact=1&left=1000000"
)


def create_test_torrent_file(announce="http://tracker.example.com/announce"):
    return TorrentFile(
        announce=announce,
        info_hash=INFO_HASH,
        piece_hashes=(bytes(range(21, 41)),),
        piece_length=262144,
        length=1000000,
        name="example.txt",
    )


def test_build_tracker_url_success():
    url = create_test_torrent_file().build_tracker_url(PEER_ID, 6881)
    print("Final announce URL:", url)
    assert url == "http://tracker.example.com/announce?" + EXPECTED_QUERY


def test_build_tracker_url_function_matches_method():
    torrent = create_test_torrent_file()
    assert build_tracker_url(torrent, PEER_ID, 6881) == torrent.build_tracker_url(PEER_ID, 6881)


def test_build_tracker_url_replaces_existing_query():
    torrent = create_test_torrent_file("http://tracker.example.com/announce?passkey=abc")
    url = torrent.build_tracker_url(PEER_ID, 6881)
    assert "passkey" not in url
    assert url.endswith("?" + EXPECTED_QUERY)


def test_build_tracker_url_keeps_port_and_fragment():
    torrent = create_test_torrent_file("https://tracker.example.com:8443/a/announce#frag")
    url = torrent.build_tracker_url(PEER_ID, 6881)
    assert url == "https://tracker.example.com:8443/a/announce?" + EXPECTED_QUERY + "#frag"


def test_build_tracker_url_special_bytes_encoded():
    torrent = create_test_torrent_file()
    url = torrent.build_tracker_url(b" \n\r&=?%" + b"x" * 13, 51413)
    assert "peer_id=%20%0A%0D%26%3D%3F%25xxxxxxxxxxxxx&" in url
    assert " " not in url
    assert "\n" not in url
    assert "port=51413" in url


def test_build_tracker_url_url_override():
    torrent = create_test_torrent_file()
    url = build_tracker_url(torrent, PEER_ID, 6881, url="http://backup.example/ann")
    assert url == "http://backup.example/ann?" + EXPECTED_QUERY


def test_build_tracker_url_invalid_announce_fails():
    torrent = create_test_torrent_file("not-a-valid-url")
    with pytest.raises(InvalidAnnounceUrl) as exc:
        torrent.build_tracker_url(PEER_ID, 6881)

    assert exc.value.announce == "not-a-valid-url"
    assert "Invalid announce URL" in str(exc.value)
    assert "not-a-valid-url" in str(exc.value)


def test_build_tracker_url_rejects_bad_peer_id():
    with pytest.raises(ValueError):
        create_test_torrent_file().build_tracker_url(b"short", 6881)


@pytest.mark.parametrize("port", [-1, 65536])
def test_build_tracker_url_rejects_bad_port(port):
    with pytest.raises(ValueError):
        create_test_torrent_file().build_tracker_url(PEER_ID, port)


def test_percent_encode_keeps_only_alphanumerics():
    assert percent_encode(b"aZ09") == "aZ09"
    assert percent_encode(b"-_.~ \xff") == "%2D%5F%2E%7E%20%FF"
    assert percent_encode(b"") == ""
