import pytest

from backend.utils.frame_message import FrameActionPayload, parse_button_index, parse_frame_payload


@pytest.mark.parametrize(
    "raw,expected",
    [
        (1, 1),
        (4, 4),
        ("2", 2),
        (" 3 ", 3),
        ("-1", -1),
        (2.0, 2),
        (None, None),
        ("two", None),
        (True, None),
        (2.5, None),
        ([], None),
        ("²", None),
        ("--5", None),
        ("1" * 5000, None),
    ],
)
def test_parse_button_index(raw, expected):
    assert parse_button_index(raw) == expected


def test_flat_payload():
    payload = parse_frame_payload({"buttonIndex": 3, "state": "abc"})
    assert payload.button_index == 3
    assert payload.state == "abc"


def test_untrusted_data_payload():
    payload = parse_frame_payload(
        {"untrustedData": {"fid": 42, "username": "alice", "buttonIndex": 2, "state": "tok"}}
    )
    assert payload.button_index == 2
    assert payload.state == "tok"
    assert payload.user.fid == 42
    assert payload.user.username == "alice"


def test_top_level_fields_win():
    payload = parse_frame_payload({"buttonIndex": 1, "untrustedData": {"buttonIndex": 4}})
    assert payload.button_index == 1


@pytest.mark.parametrize("body", [None, [], "text", 7, {"state": 12}, {"untrustedData": "nope"}])
def test_odd_bodies_mean_no_action(body):
    payload = parse_frame_payload(body)
    assert payload.button_index is None
    assert payload.state is None
    assert payload.user.fid == 0


def test_empty_payload_defaults():
    assert parse_frame_payload({}) == FrameActionPayload()
