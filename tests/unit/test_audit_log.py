"""Тесты для AuditLog и JSON Schema контрактов."""

import pytest
from jsonschema import ValidationError

from src.audit.log import AuditLog
from src.core.contracts.validators import (
    AuditEventValidator,
    SchemaLoader,
    validate_audit_event,
    validate_ledger_snapshot,
    validate_price_state,
)
from src.core.domain.events import (
    Approval,
    EventName,
    Price,
    Received,
    TokensBurn,
    TokensMint,
    Transfer,
)
from tests.constants import OWNER, SCENARIO_FEED, SCENARIO_NOW, SPENDER, USER


@pytest.fixture
def log() -> AuditLog:
    audit_log = AuditLog()
    audit_log.append(TokensMint(merchant=USER, beneficiary=OWNER, amount=10))
    audit_log.append(Approval(owner=OWNER, spender=SPENDER, amount=5))
    audit_log.append(TokensBurn(from_=OWNER, amount=3))
    return audit_log


class TestAuditLog:
    """Журнал только на добавление."""

    def test_append_returns_seq(self):
        audit_log = AuditLog()
        assert audit_log.append(Received(sender=USER, amount=1)) == 0
        assert audit_log.append(Received(sender=USER, amount=2)) == 1
        assert len(audit_log) == 2

    def test_names_and_filter(self, log):
        assert log.names() == ["TokensMint", "Approval", "TokensBurn"]
        assert log.events(EventName.APPROVAL) == [Approval(owner=OWNER, spender=SPENDER, amount=5)]
        assert log.latest(EventName.TRANSFER) is None
        assert log.latest().amount == 3

    def test_iteration_is_a_copy(self, log):
        events = list(log)
        log.append(Transfer(sender=OWNER, recipient=USER, amount=1))
        assert len(events) == 3
        assert len(log) == 4

    def test_truncate(self, log):
        log._truncate(1)
        assert log.names() == ["TokensMint"]
        log._truncate(5)
        assert len(log) == 1

    def test_extend(self):
        audit_log = AuditLog()
        audit_log.extend([Received(sender=USER, amount=1), Received(sender=OWNER, amount=2)])
        assert len(audit_log) == 2


class TestRecords:
    """Экспорт записей и схема audit_event."""

    def test_records(self, log):
        records = log.to_records()

        assert [r["seq"] for r in records] == [0, 1, 2]
        assert records[0] == {
            "seq": 0,
            "event": "TokensMint",
            "fields": {"merchant": USER, "beneficiary": OWNER, "amount": 10},
        }

    def test_burn_uses_from_key(self, log):
        record = log.to_records(start=2)[0]
        assert record["seq"] == 2
        assert record["fields"] == {"from": OWNER, "amount": 3}

    def test_price_record(self):
        audit_log = AuditLog()
        audit_log.append(
            Price(
                quote_price=SCENARIO_FEED,
                token_price_in_quote=1_031_622_400,
                token_price_in_base=5_158_112_000_000_000,
                tokens_per_base_unit=193,
                time=SCENARIO_NOW,
            )
        )
        assert audit_log.to_records()[0]["fields"]["tokens_per_base_unit"] == 193

    def test_invalid_record(self):
        with pytest.raises(ValidationError):
            validate_audit_event({"seq": 0, "event": "TokensBurn", "fields": {"holder": USER, "amount": 1}})

    def test_unknown_event(self):
        with pytest.raises(ValidationError):
            validate_audit_event({"seq": 0, "event": "Minted", "fields": {}})

    def test_negative_amount(self):
        with pytest.raises(ValidationError):
            validate_audit_event(
                {"seq": 0, "event": "Transfer", "fields": {"sender": USER, "recipient": OWNER, "amount": -1}}
            )


class TestSchemas:
    """Загрузка и проверка схем."""

    def test_loader_caches(self):
        loader = SchemaLoader()
        assert loader.load_schema("price_state") is loader.load_schema("price_state")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "absent")

    def test_price_state(self):
        validate_price_state(
            {
                "time": SCENARIO_NOW,
                "elapsed": 31_622_400,
                "quote_price": SCENARIO_FEED,
                "token_price_in_quote": 1_031_622_400,
                "token_price_in_base": 5_158_112_000_000_000,
                "tokens_per_base_unit": 193,
            }
        )
        with pytest.raises(ValidationError):
            validate_price_state({"time": SCENARIO_NOW})

    def test_empty_snapshot(self):
        validate_ledger_snapshot(
            {
                "name": "Stablecoin",
                "symbol": "SC",
                "decimals": 18,
                "total_supply": 0,
                "reserve_balance": 0,
                "balances": {},
                "allowances": {},
                "last_price": None,
            }
        )

    def test_validator_helpers(self):
        validator = AuditEventValidator()
        record = {"seq": 0, "event": "Received", "fields": {"sender": USER, "amount": 0}}
        assert validator.is_valid(record)
        assert list(validator.iter_errors(record)) == []
        assert not validator.is_valid({"seq": -1, "event": "Received", "fields": {}})
