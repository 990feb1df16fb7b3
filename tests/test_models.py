from pathlib import Path

import pytest

from prestashop_installer.exceptions import VersionResolutionError
from prestashop_installer.models import Fixture, InvocationRequest, VersionFeed


@pytest.mark.parametrize(
    "value, expected",
    [
        ("starwars", Fixture.STARWARS),
        (" STARWARS ", Fixture.STARWARS),
        ("Got", Fixture.GOT),
        ("tech\n", Fixture.TECH),
        ("xyz", Fixture.NONE),
        ("", Fixture.NONE),
        (None, Fixture.NONE),
    ],
)
def test_fixture_parse(value, expected):
    assert Fixture.parse(value) is expected


def test_fixture_truthiness():
    assert not Fixture.NONE
    assert Fixture.TECH


def test_invocation_request_target_is_relative_to_working_dir(tmp_path):
    req = InvocationRequest(folder="shop", working_dir=tmp_path)
    assert req.target == tmp_path / "shop"
    assert req.release is None
    assert req.fixture is Fixture.NONE


def test_invocation_request_keeps_absolute_folder(tmp_path):
    absolute = tmp_path / "elsewhere" / "shop"
    req = InvocationRequest(folder=str(absolute), working_dir=Path("/unused"))
    assert req.target == absolute


def test_feed_parses_channels_and_branches(feed_xml):
    feed = VersionFeed.from_xml(feed_xml)

    assert [c.name for c in feed.channels] == ["beta", "stable"]
    stable = feed.stable_channel()
    assert stable is not None
    assert [b.num for b in stable.branches] == ["1.6.1.9", "1.6.1.10", "1.5.6.3"]
    assert stable.branches[0].download_link == "https://example.test/prestashop_1.6.1.9.zip"


def test_latest_stable_uses_numeric_comparison(feed_xml):
    branch = VersionFeed.from_xml(feed_xml).latest_stable()
    assert branch.num == "1.6.1.10"
    assert branch.download_link == "https://example.test/prestashop_1.6.1.10.zip"


def test_latest_stable_ignores_unavailable_stable_channel():
    feed = VersionFeed.from_xml(
        b'<channels><channel name="stable" available="0">'
        b"<branch><num>1.6.1.3</num><download><link>x</link></download></branch>"
        b"</channel></channels>"
    )
    with pytest.raises(VersionResolutionError):
        feed.latest_stable()


def test_latest_stable_fails_without_stable_channel():
    feed = VersionFeed.from_xml(b'<channels><channel name="rc" available="1"/></channels>')
    with pytest.raises(VersionResolutionError):
        feed.latest_stable()


def test_latest_stable_fails_without_branches():
    feed = VersionFeed.from_xml(b'<channels><channel name="stable" available="1"/></channels>')
    with pytest.raises(VersionResolutionError):
        feed.latest_stable()


def test_malformed_feed_raises_resolution_error():
    with pytest.raises(VersionResolutionError):
        VersionFeed.from_xml(b"<channels><channel")
