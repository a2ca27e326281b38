# tests/core/test_syntax.py
"""
Unit tests for field syntax validation.
"""
from __future__ import annotations

import pytest

from ngsi2.contracts import (
    Attribute,
    Entity,
    InvalidSyntax,
    Metadata,
    Registration,
    Subscription,
)
from ngsi2.core.syntax import (
    MAX_FIELD_LENGTH,
    validate_attribute,
    validate_attributes,
    validate_entity,
    validate_field,
    validate_query_lists,
    validate_registration,
    validate_subscription,
)

FORBIDDEN = {0x23, 0x26, 0x2F, 0x3F}


def _allowed(code: int) -> bool:
    return 0x21 <= code <= 0x7E and code not in FORBIDDEN


class TestValidateField:
    @pytest.mark.parametrize("code", range(0x00, 0x80))
    def test_every_ascii_character(self, code):
        field = f"a{chr(code)}b"
        if _allowed(code):
            validate_field(field)
        else:
            with pytest.raises(InvalidSyntax) as exc_info:
                validate_field(field)
            assert exc_info.value.offending_field == field

    @pytest.mark.parametrize("code", [0x22, 0x24, 0x25, 0x27, 0x2E, 0x30, 0x3E, 0x40, 0x7E])
    def test_boundary_characters_allowed(self, code):
        validate_field(chr(code))

    @pytest.mark.parametrize("char", ["#", "&", "/", "?", " ", "\t", "\x7f", "é"])
    def test_forbidden_characters(self, char):
        with pytest.raises(InvalidSyntax):
            validate_field(f"Room{char}1")

    def test_length_limit(self):
        validate_field("x" * MAX_FIELD_LENGTH)
        with pytest.raises(InvalidSyntax):
            validate_field("x" * (MAX_FIELD_LENGTH + 1))

    def test_empty_field_is_accepted(self):
        validate_field("")

    def test_value_not_mutated(self):
        field = "Bcn-Welt"
        validate_field(field)
        assert field == "Bcn-Welt"


class TestValidateQueryLists:
    def test_all_absent(self):
        validate_query_lists()

    def test_each_token_checked(self):
        validate_query_lists(ids="Bcn-Welt,Boe-Idearium", types="Room", attrs="temperature,humidity")
        with pytest.raises(InvalidSyntax) as exc_info:
            validate_query_lists(attrs="temperature,hum#idity")
        assert exc_info.value.offending_field == "hum#idity"

    def test_empty_tokens_pass(self):
        validate_query_lists(attrs="a,,b,")

    def test_length_applies_per_token(self):
        long_token = "x" * 200
        validate_query_lists(ids=f"{long_token},{long_token}")

    def test_first_violation_reported(self):
        with pytest.raises(InvalidSyntax) as exc_info:
            validate_query_lists(ids="a/b", types="c?d")
        assert exc_info.value.offending_field == "a/b"


class TestCompositeValidators:
    def test_attribute_type_and_metadata(self):
        validate_attribute(
            Attribute(value=1, type="Float", metadata={"unit": Metadata(type="string", value="CEL")})
        )
        with pytest.raises(InvalidSyntax):
            validate_attribute(Attribute(value=1, type="Flo at"))
        with pytest.raises(InvalidSyntax):
            validate_attribute(Attribute(value=1, metadata={"un#it": Metadata(value="CEL")}))
        with pytest.raises(InvalidSyntax):
            validate_attribute(Attribute(value=1, metadata={"unit": Metadata(type="a&b")}))

    def test_attribute_names(self):
        with pytest.raises(InvalidSyntax) as exc_info:
            validate_attributes({"temp?": Attribute(value=1)})
        assert exc_info.value.offending_field == "temp?"

    def test_entity(self):
        validate_entity(Entity(id="Bcn-Welt", type="Room"))
        validate_entity(Entity())
        with pytest.raises(InvalidSyntax):
            validate_entity(Entity(id="Bcn Welt"))
        with pytest.raises(InvalidSyntax):
            validate_entity(Entity(id="Bcn-Welt", type="Ro/om"))
        with pytest.raises(InvalidSyntax):
            validate_entity(Entity.build(id="Bcn-Welt", attributes={"pres#sure": Attribute(value=1)}))

    def test_registration(self):
        registration = Registration.model_validate(
            {
                "subject": {
                    "entities": [{"id": "Bcn_Welt", "type": "Room"}],
                    "attributes": ["temperature"],
                },
                "metadata": {"providingService": {"type": "none", "value": "x"}},
            }
        )
        validate_registration(registration)

        bad_subject = Registration.model_validate(
            {"subject": {"entities": [{"id": "Bcn Welt"}]}}
        )
        with pytest.raises(InvalidSyntax):
            validate_registration(bad_subject)

        bad_attribute = Registration.model_validate(
            {"subject": {"attributes": ["temp&"]}}
        )
        with pytest.raises(InvalidSyntax):
            validate_registration(bad_attribute)

        bad_metadata = Registration.model_validate(
            {"metadata": {"providing#Service": {"value": "x"}}}
        )
        with pytest.raises(InvalidSyntax):
            validate_registration(bad_metadata)

    def test_subscription(self):
        validate_subscription(Subscription())
        with pytest.raises(InvalidSyntax):
            validate_subscription(
                Subscription.model_validate(
                    {"subject": {"condition": {"attributes": ["tem perature"]}}}
                )
            )
        with pytest.raises(InvalidSyntax):
            validate_subscription(
                Subscription.model_validate({"notification": {"attributes": ["a/b"]}})
            )
        with pytest.raises(InvalidSyntax):
            validate_subscription(
                Subscription.model_validate({"subject": {"entities": [{"type": "Ro?om"}]}})
            )
