"""
Unit tests for the payload decoder.
"""

import pytest

from admission_webhook.admission.decoder import Decoder
from admission_webhook.errors import DecodeError
from admission_webhook.models.admission import AdmissionRequest, Operation
from admission_webhook.models.resource import Resource
from tests.fixtures.admission_resources import (
    MINIMAL_WIDGET,
    SCALED_WIDGET,
    Widget,
    encode,
)


@pytest.fixture
def decoder():
    return Decoder()


class TestDecodeRaw:
    def test_empty_object_decodes_to_empty_resource(self, decoder):
        obj = decoder.decode_raw(b"{}", Resource)

        assert isinstance(obj, Resource)
        assert obj.kind == ""
        assert obj.metadata.name == ""

    def test_typed_resource(self, decoder):
        widget = decoder.decode_raw(encode(SCALED_WIDGET), Widget)

        assert widget.kind == "Widget"
        assert widget.api_version == "example.test.org/v1"
        assert widget.metadata.labels == {"app": "widget"}
        assert widget.metadata.resource_version == "42"
        assert widget.spec.replicas == 3
        assert widget.group_version_kind.group == "example.test.org"

    def test_unknown_fields_are_kept_on_bare_resource(self, decoder):
        obj = decoder.decode_raw(encode(SCALED_WIDGET), Resource)

        assert obj.extra_field("spec") == {
            "replicas": 3,
            "image": "registry.example/widget:1.0",
        }
        assert obj.extra_field("status") is None

    def test_unstructured_target(self, decoder):
        obj = decoder.decode_raw(encode(MINIMAL_WIDGET), dict)

        assert obj == MINIMAL_WIDGET

    def test_same_input_same_output(self, decoder):
        raw = encode(SCALED_WIDGET)

        assert decoder.decode_raw(raw, Widget) == decoder.decode_raw(raw, Widget)

    def test_decoded_objects_are_independent(self, decoder):
        raw = encode(SCALED_WIDGET)
        first = decoder.decode_raw(raw, Widget)
        first.metadata.labels["app"] = "changed"

        second = decoder.decode_raw(raw, Widget)

        assert second.metadata.labels == {"app": "widget"}

    @pytest.mark.parametrize("raw", [None, b"", b"   "])
    def test_empty_payload_fails(self, decoder, raw):
        with pytest.raises(DecodeError) as exc_info:
            decoder.decode_raw(raw, Resource)

        assert "no content to decode" in str(exc_info.value)
        assert exc_info.value.category == "decode"

    @pytest.mark.parametrize("raw", [b"not json", b"{", b"[]", b"42", b'"text"'])
    def test_malformed_payload_fails(self, decoder, raw):
        with pytest.raises(DecodeError) as exc_info:
            decoder.decode_raw(raw, Resource)

        assert exc_info.value.kind == "Resource"

    def test_unstructured_non_object_fails(self, decoder):
        with pytest.raises(DecodeError):
            decoder.decode_raw(b"[1, 2]", dict)

    def test_kind_mismatch_fails(self, decoder):
        gadget = dict(MINIMAL_WIDGET, kind="Gadget")

        with pytest.raises(DecodeError) as exc_info:
            decoder.decode_raw(encode(gadget), Widget)

        assert "'Gadget' does not match 'Widget'" in str(exc_info.value)

    def test_missing_kind_is_accepted(self, decoder):
        widget = decoder.decode_raw(b'{"spec": {"replicas": 2}}', Widget)

        assert widget.spec.replicas == 2

    def test_invalid_field_fails(self, decoder):
        broken = dict(MINIMAL_WIDGET, spec={"replicas": -1})

        with pytest.raises(DecodeError) as exc_info:
            decoder.decode_raw(encode(broken), Widget)

        assert "replicas" in str(exc_info.value)


class TestDecodeRequest:
    def test_decodes_new_object(self, decoder):
        request = AdmissionRequest(
            operation=Operation.CREATE,
            object=encode(SCALED_WIDGET),
            old_object=encode(MINIMAL_WIDGET),
        )

        widget = decoder.decode(request, Widget)

        assert widget.spec.replicas == 3

    def test_request_without_object_fails(self, decoder):
        request = AdmissionRequest(
            operation=Operation.DELETE, old_object=encode(MINIMAL_WIDGET)
        )

        with pytest.raises(DecodeError):
            decoder.decode(request, Widget)
