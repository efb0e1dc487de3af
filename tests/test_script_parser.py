import json

import pytest

from ad_studio.core.domain.errors import GenerationFailedError, SCRIPT_FAILED_MESSAGE
from ad_studio.script_parser import parse_ad_script


def test_parses_schema_response(script_payload):
    script = parse_ad_script(json.dumps(script_payload))

    assert script.title == "Unleash the Sound"
    assert len(script.scenes) == 3
    assert [s.scene_number for s in script.scenes] == [1, 2, 3]
    assert script.scenes[0].dialogue == "None"


def test_surrounding_whitespace_is_ignored(script_payload):
    script = parse_ad_script("\n  " + json.dumps(script_payload) + "  \n")

    assert script.tagline == "Your World, Your Music."


def test_scene_order_is_not_resorted(script_payload):
    script_payload["scenes"].reverse()

    script = parse_ad_script(json.dumps(script_payload))

    assert [s.scene_number for s in script.scenes] == [3, 2, 1]


def test_malformed_json_is_a_generation_failure():
    with pytest.raises(GenerationFailedError) as exc_info:
        parse_ad_script('{"title": "Half a script", "scenes": [')

    assert exc_info.value.user_message == SCRIPT_FAILED_MESSAGE


@pytest.mark.parametrize("missing", ["title", "tagline", "scenes"])
def test_missing_top_level_field_fails(script_payload, missing):
    del script_payload[missing]

    with pytest.raises(GenerationFailedError):
        parse_ad_script(json.dumps(script_payload))


def test_missing_scene_field_fails(script_payload):
    del script_payload["scenes"][1]["sound"]

    with pytest.raises(GenerationFailedError):
        parse_ad_script(json.dumps(script_payload))


@pytest.mark.parametrize("text", ["", None])
def test_empty_response_fails(text):
    with pytest.raises(GenerationFailedError):
        parse_ad_script(text)
