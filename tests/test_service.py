from datetime import date, datetime, timedelta

import pytest

from rcslicense.common.codec import YamlCodec
from rcslicense.common.exceptions import (
    DeserializationError,
    LicenseExpiredError,
    LicenseValidationError,
)
from rcslicense.common.models import ExpiryState
from rcslicense.core.document import LicenseDocument
from rcslicense.core.service import LicenseService

SEALED_FIELDS = ("check", "digest", "signature", "integrity")


def _visible(fields: LicenseDocument) -> dict:
    return {key: value for key, value in fields.items() if key not in SEALED_FIELDS}


def test_generate_default(service: LicenseService) -> None:
    document = service.generate_default()
    assert document.version == "9.6"
    assert document["users"] == 1
    assert document.agents["total"] == 0
    assert document["scout"] is True
    assert len(document["check"]) == 8
    assert "integrity" not in document


def test_generated_watermarks_differ(service: LicenseService) -> None:
    assert service.generate_default()["check"] != service.generate_default()["check"]


def test_end_to_end(service: LicenseService) -> None:
    document = service.generate_default()
    service.apply_overrides(document, version="9.6")
    data = service.finalize(document)

    result = service.load(data)

    assert result.verification.failures == []
    assert result.expiry.state is ExpiryState.VALID
    assert result.document["integrity"] == document["integrity"]


def test_round_trip_keeps_visible_fields(service: LicenseService) -> None:
    original = service.generate_default()
    first = service.finalize(original)

    reloaded = service.load(first).document
    second = service.finalize(reloaded)
    final = service.load(second).document

    assert _visible(final) == _visible(original)
    assert final["check"] == original["check"]
    assert list(final) == list(original)


def test_finalize_sets_missing_watermark(service: LicenseService, document: LicenseDocument) -> None:
    del document["check"]
    service.finalize(document)
    assert len(document["check"]) == 8


def test_finalize_keeps_existing_watermark(service: LicenseService, document: LicenseDocument) -> None:
    service.finalize(document)
    assert document["check"] == "abcdefgh"


def test_load_reports_tampering(service: LicenseService, document: LicenseDocument) -> None:
    codec = YamlCodec()
    fields = codec.decode(service.finalize(document))
    fields["users"] = 50

    result = service.load(codec.encode(fields))

    assert result.document["users"] == 50
    assert not result.verification.integrity_valid
    assert not result.verification.signature_valid


def test_load_unsealed_legacy_file(service: LicenseService, legacy_fields: dict) -> None:
    result = service.load(YamlCodec().encode(legacy_fields))

    assert not result.verification.ok
    assert result.document["correlation"] is True
    assert result.document["archive"] is False
    assert result.document.agents["winmo"] == [False, False]
    assert result.document["scout"] is True


def test_load_migrates_after_verification(service: LicenseService, legacy_fields: dict) -> None:
    # a sealed 9.2 file keeps verifying even though migration reshapes it
    legacy = LicenseDocument(legacy_fields)
    service.integrity.compute(legacy)

    result = service.load(YamlCodec().encode(legacy.to_dict()))

    assert result.verification.ok
    assert "winmo" in result.document.agents


def test_load_malformed_bytes(service: LicenseService) -> None:
    with pytest.raises(DeserializationError):
        service.load(b"{not: [valid")


def test_load_rejects_unrenderable_extra_field(service: LicenseService, document: LicenseDocument) -> None:
    data = service.finalize(document) + b":extra: !!set {a: null}\n"

    with pytest.raises(DeserializationError, match="Cannot render set"):
        service.load(data)


def test_load_expired(service: LicenseService, document: LicenseDocument, now: datetime) -> None:
    codec = YamlCodec()
    fields = document.to_dict()
    fields["expiry"] = (now - timedelta(days=1)).isoformat()

    with pytest.raises(LicenseExpiredError) as excinfo:
        service.load(codec.encode(fields))

    assert not excinfo.value.hidden
    assert excinfo.value.exit_code == 1


def test_load_hidden_expired(
    service: LicenseService, document: LicenseDocument, now: datetime
) -> None:
    fields = document.to_dict()
    fields["digest_seed"] = int((now - timedelta(seconds=1)).timestamp()).to_bytes(4, "little")

    with pytest.raises(LicenseExpiredError, match="hiddenly expired") as excinfo:
        service.load(YamlCodec().encode(fields))

    assert excinfo.value.hidden


@pytest.mark.parametrize(("desktop", "mobile"), [(3, 0), (0, 3)])
def test_agent_totals_are_fatal(
    service: LicenseService, document: LicenseDocument, desktop: int, mobile: int
) -> None:
    document.agents.update(total=2, desktop=desktop, mobile=mobile)

    with pytest.raises(LicenseValidationError, match="total is lower"):
        service.finalize(document)
    with pytest.raises(LicenseValidationError, match="total is lower"):
        service.load(YamlCodec().encode(document.to_dict()))


def test_apply_overrides_version(service: LicenseService, document: LicenseDocument) -> None:
    service.apply_overrides(document, version="9.7")
    assert document.version == "9.7"
    assert list(document).index("version") == 2


def test_apply_overrides_upgrade_restores_profiling(
    service: LicenseService, legacy_fields: dict
) -> None:
    document = service.load(YamlCodec().encode(legacy_fields)).document
    assert "correlation" in document

    service.apply_overrides(document, version="9.6")

    assert document["profiling"] is True
    assert "correlation" not in document
    assert document["archive"] is False
    assert document.agents["winmo"] == [False, False]
    assert document["scout"] is True


def test_apply_overrides_hidden_expiry(service: LicenseService, document: LicenseDocument) -> None:
    service.apply_overrides(document, hidden_expiry=date(2030, 1, 1))
    assert document["digest_seed"] == (1893456000).to_bytes(4, "little")

    data = service.finalize(document)
    result = service.load(data)

    assert result.verification.ok
    assert result.document["digest_seed"] == document["digest_seed"]


def test_finalize_rejects_past_hidden_expiry(service: LicenseService, document: LicenseDocument) -> None:
    service.apply_overrides(document, hidden_expiry=date(2020, 1, 1))
    with pytest.raises(LicenseExpiredError):
        service.finalize(document)


def test_overridden_version_changes_integrity(service: LicenseService) -> None:
    older = service.generate_default()
    newer = older.copy()
    service.apply_overrides(older, version="9.5")

    service.finalize(older)
    service.finalize(newer)

    assert older["integrity"] != newer["integrity"]


def test_describe(service: LicenseService, document: LicenseDocument) -> None:
    assert service.describe(document) == [
        "Expiration date: Never",
        "Encryption: Full",
        "The license will NOT ask for a HASP dongle",
    ]

    document["serial"] = "HASP-1234"
    document["expiry"] = "2030-01-01"
    document["digest_seed"] = (1893456000).to_bytes(4, "little")
    assert service.describe(document) == [
        "Expiration date: 2030-01-01",
        "Hidden Expiration date: 2030-01-01 00:00:00+00:00",
        "Encryption: Restricted",
        "The HASP dongle associated with this license is HASP-1234",
    ]


def test_load_logs_diagnostics(
    service: LicenseService, document: LicenseDocument, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level("INFO", logger="rcslicense"):
        service.load(service.finalize(document))
    assert "Expiration date: Never" in caplog.text
    assert "Checking integrity..." in caplog.text
