"""Tests for wallet domain models."""

import pytest
from pydantic import ValidationError

from shadow_wallet.models import (
    ActionKind,
    ActionReceipt,
    ActionRequest,
    Balance,
    FaucetResponse,
    GatewayResult,
    ShieldedAddress,
    format_amount,
)


class TestShieldedAddress:
    """Tests for ShieldedAddress model."""

    def test_valid_record(self) -> None:
        record = ShieldedAddress(
            address="shadow1qqqqqqqqqqqqqqqqqqqqqqqqqqqqabcd",
            spending_key="sk",
            viewing_key="vk",
        )
        assert record.short_address == "shadow1qqq...abcd"

    def test_short_address_keeps_short_values(self) -> None:
        assert ShieldedAddress(address="shadow1abc").short_address == "shadow1abc"

    def test_empty_address_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ShieldedAddress(address="")

    def test_missing_address_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ShieldedAddress.model_validate({"spending_key": "sk"})

    def test_is_frozen(self) -> None:
        record = ShieldedAddress(address="shadow1abc")
        with pytest.raises(ValidationError):
            record.address = "shadow1xyz"  # type: ignore[misc]


class TestBalance:
    """Tests for Balance model."""

    def test_total(self) -> None:
        assert Balance(transparent=700.0, shielded=250.0).total == 950.0

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Balance(transparent=-1.0)


class TestActionKind:
    """Tests for ActionKind labels."""

    def test_button_labels_show_direction(self) -> None:
        assert ActionKind.SHIELD.button_label == "Shield Funds (t→z)"
        assert ActionKind.UNSHIELD.button_label == "Unshield Funds (z→t)"
        assert ActionKind.SEND_PRIVATE.button_label == "Send Private (z→z)"
        assert ActionKind.SEND_PUBLIC.button_label == "Send Public (t→t)"

    def test_titles(self) -> None:
        assert ActionKind.SHIELD.title == "Shield Funds"
        assert ActionKind.SEND_PUBLIC.title == "Send Public"


class TestActionRequest:
    """Tests for ActionRequest model."""

    def test_amount_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ActionRequest(kind=ActionKind.SHIELD, recipient="shadow1abc", amount=0.0)

    def test_created_at_defaults(self) -> None:
        request = ActionRequest(kind=ActionKind.SEND_PUBLIC, recipient="sol1abc", amount=1.0)
        assert request.created_at > 0


class TestActionReceipt:
    """Tests for ActionReceipt interpretation."""

    def test_summary_prefers_type_and_signature(self) -> None:
        receipt = ActionReceipt(type="shield", status="confirmed", signature="5Kx9", bridge_id="b1")
        assert receipt.summary() == "shield: 5Kx9"

    def test_summary_falls_back_to_status_and_bridge_id(self) -> None:
        receipt = ActionReceipt(status="pending", bridge_id="bridge-42")
        assert receipt.summary() == "pending: bridge-42"

    def test_summary_for_empty_body(self) -> None:
        assert ActionReceipt().summary() == "Success: "

    def test_extra_fields_kept(self) -> None:
        receipt = ActionReceipt.model_validate({"type": "shield", "slot": 12})
        assert receipt.model_extra == {"slot": 12}

    def test_numeric_fields_accepted(self) -> None:
        receipt = ActionReceipt.model_validate({"type": "shield", "bridge_id": 12345})
        assert receipt.accepted is True
        assert receipt.summary() == "shield: 12345"

    def test_numeric_status_used_as_label(self) -> None:
        receipt = ActionReceipt.model_validate({"status": 200, "signature": "5Kx9"})
        assert receipt.accepted is True
        assert receipt.summary() == "200: 5Kx9"

    def test_nested_fields_do_not_reject(self) -> None:
        receipt = ActionReceipt.model_validate({"type": ["shield"], "bridge_id": {"id": 1}})
        assert receipt.accepted is True

    def test_accepted(self) -> None:
        assert ActionReceipt().accepted is True
        assert ActionReceipt(success=True).accepted is True
        assert ActionReceipt(success=False).accepted is False
        assert ActionReceipt(error="insufficient funds").accepted is False


class TestFaucetResponse:
    """Tests for FaucetResponse parsing."""

    def test_defaults_to_failure(self) -> None:
        response = FaucetResponse.model_validate({})
        assert response.success is False
        assert response.amount_shol == 0.0

    def test_parses_success(self) -> None:
        response = FaucetResponse.model_validate({"success": True, "amount_shol": 1000})
        assert response.success is True
        assert response.amount_shol == 1000.0

    def test_negative_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FaucetResponse.model_validate({"success": True, "amount_shol": -5})


class TestGatewayResult:
    """Tests for GatewayResult constructors."""

    def test_success(self) -> None:
        result = GatewayResult.success({"a": 1})
        assert result.ok is True
        assert result.data == {"a": 1}

    def test_failed(self) -> None:
        result = GatewayResult.failed()
        assert result.ok is False
        assert result.data is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1000.0, "1000"), (0.5, "0.5"), (12.25, "12.25"), (0.0, "0")],
)
def test_format_amount(value: float, expected: str) -> None:
    assert format_amount(value) == expected
