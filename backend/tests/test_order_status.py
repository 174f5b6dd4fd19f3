import pytest

from backend.app.core.exceptions import InvalidStatusError
from backend.app.db.models.core_types import OrderStatus
from backend.services.order_status import canonicalize_status, fold_status_text, status_label


@pytest.mark.parametrize(
    "text, expected",
    [
        ("TESLIMEDILDI", OrderStatus.delivered),
        ("Teslim Edildi", OrderStatus.delivered),
        ("teslim edildi", OrderStatus.delivered),
        ("TESLİM EDİLDİ", OrderStatus.delivered),
        ("TESLİMEDİLDİ", OrderStatus.delivered),
        ("  Teslim   Edildi  ", OrderStatus.delivered),
        ("DELIVERED", OrderStatus.delivered),
        ("delivered", OrderStatus.delivered),
        ("Beklemede", OrderStatus.pending),
        ("BEKLEMEDE", OrderStatus.pending),
        ("pending", OrderStatus.pending),
        ("Onaylandı", OrderStatus.approved),
        ("ONAYLANDI", OrderStatus.approved),
        ("approved", OrderStatus.approved),
        ("Hazırlanıyor", OrderStatus.in_preparation),
        ("HAZIRLANIYOR", OrderStatus.in_preparation),
        ("IN_PREPARATION", OrderStatus.in_preparation),
        ("in preparation", OrderStatus.in_preparation),
    ],
)
def test_known_variants_canonicalize(text, expected):
    assert canonicalize_status(text) is expected


@pytest.mark.parametrize("text", ["foo", "", "   ", "TESLIM", "CANCELLED", "IPTAL", None])
def test_unknown_text_is_rejected(text):
    with pytest.raises(InvalidStatusError) as exc_info:
        canonicalize_status(text)

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "invalid status"


def test_enum_member_passes_through():
    assert canonicalize_status(OrderStatus.approved) is OrderStatus.approved


def test_fold_handles_turkish_dotted_and_dotless_i():
    assert fold_status_text("teslim edildi") == "TESLIMEDILDI"
    assert fold_status_text("Hazırlanıyor") == "HAZIRLANIYOR"
    assert fold_status_text("in-preparation") == "INPREPARATION"


def test_every_status_has_a_label():
    assert status_label(OrderStatus.delivered) == "Teslim Edildi"
    assert {status_label(s) for s in OrderStatus} == {
        "Beklemede",
        "Hazırlanıyor",
        "Onaylandı",
        "Teslim Edildi",
    }
