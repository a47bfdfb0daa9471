"""Tests for applying parsed pastes to the transaction form."""

from unittest.mock import MagicMock, call

from conftest import DATA, RECIPIENT, SAFE, TRUNCATED_SELECTOR_PASTE, build_paste
from paste_parser.form import (
    EXPAND_INSTRUCTIONS,
    InMemoryForm,
    check_missing_fields,
    process_paste,
    update_form_with_parsed_data,
)
from paste_parser.models import OutcomeKind, ParsedTransactionFields, TransactionForm


def _mock_form(method: str = "direct", version: str = "1.4.1") -> MagicMock:
    form = MagicMock()
    form.get_value.side_effect = {"method": method, "version": version}.get
    return form


class TestProcessPaste:
    def test_empty_input(self):
        form = _mock_form()
        outcome = process_paste("", form)
        assert outcome.kind == OutcomeKind.EMPTY_INPUT
        assert outcome.severity == "error"
        assert outcome.fields is None
        form.set_value.assert_not_called()

    def test_whitespace_only_input(self):
        assert process_paste("  \n\t ", _mock_form()).kind == OutcomeKind.EMPTY_INPUT

    def test_no_recognized_fields(self, chain_table, directory):
        form = _mock_form()
        outcome = process_paste("hello world", form, chain_table, directory)
        assert outcome.kind == OutcomeKind.NO_RECOGNIZED_FIELDS
        assert outcome.severity == "error"
        form.reset.assert_not_called()
        form.set_value.assert_not_called()

    def test_truncated_paste_writes_nothing(self, chain_table, directory):
        form = _mock_form()
        outcome = process_paste(TRUNCATED_SELECTOR_PASTE, form, chain_table, directory)

        assert outcome.kind == OutcomeKind.TRUNCATED_CONTENT
        assert outcome.severity == "warning"
        assert outcome.truncated_fields == ["data"]
        assert outcome.instructions == EXPAND_INSTRUCTIONS
        assert "data" in outcome.message
        assert not outcome.applied
        assert outcome.fields.present_fields() == []
        assert outcome.fields.truncated_fields == {"data"}
        form.reset.assert_not_called()
        form.set_value.assert_not_called()

    def test_truncated_sample_file_writes_nothing(self, truncated_sample_file: str, chain_table, directory):
        form = _mock_form()
        outcome = process_paste(truncated_sample_file, form, chain_table, directory)
        assert outcome.kind == OutcomeKind.TRUNCATED_CONTENT
        assert outcome.fields.network == "ethereum"
        assert outcome.fields.chain_id == 1
        assert outcome.fields.all_network_short_names == ["eth"]
        for name in ("safe_address", "to", "value", "data", "operation", "nonce", "safe_tx_hash"):
            assert getattr(outcome.fields, name) is None, name
        assert not outcome.network_unresolved
        form.set_value.assert_not_called()

    def test_success(self, sample_paste: str, chain_table, directory):
        form = _mock_form()
        outcome = process_paste(sample_paste, form, chain_table, directory)

        assert outcome.kind == OutcomeKind.SUCCESS
        assert outcome.severity == "success"
        assert outcome.applied
        assert outcome.missing_fields == []
        assert not outcome.network_unresolved
        form.reset.assert_called_once_with(TransactionForm(method="direct", version="1.4.1").model_dump())
        form.set_value.assert_has_calls(
            [
                call("address", SAFE),
                call("to", RECIPIENT),
                call("value", "0"),
                call("data", DATA),
                call("network", "ethereum"),
                call("chain_id", 1),
            ],
            any_order=True,
        )

    def test_missing_nonce_is_partial(self, chain_table, directory):
        form = InMemoryForm()
        outcome = process_paste(build_paste(without="nonce:"), form, chain_table, directory)

        assert outcome.kind == OutcomeKind.PARTIAL_FIELDS
        assert outcome.severity == "success"
        assert outcome.missing_fields == ["Transaction nonce"]
        assert outcome.applied
        assert "Transaction nonce" in outcome.instructions[0]
        assert form.state.address == SAFE
        assert form.state.to == RECIPIENT
        assert form.state.data == DATA
        assert form.state.network == "ethereum"
        assert form.state.nonce == ""

    def test_unresolved_network_is_partial(self, chain_table, directory):
        text = build_paste().replace("eth:", "")
        outcome = process_paste(text, InMemoryForm(), chain_table, directory)
        assert outcome.kind == OutcomeKind.PARTIAL_FIELDS
        assert outcome.missing_fields == ["Network"]
        assert outcome.network_unresolved

    def test_stale_values_cleared(self, chain_table, directory):
        form = InMemoryForm(
            TransactionForm(method="direct", version="1.3.0", nonce="99", base_gas="5", network="gnosis", chain_id=100)
        )
        process_paste(build_paste(without="nonce:"), form, chain_table, directory)
        assert form.state.nonce == ""
        assert form.state.version == "1.3.0"
        assert form.state.method == "direct"
        assert form.state.network == "ethereum"
        assert form.state.chain_id == 1
        assert form.state.base_gas == "0"

    def test_truncation_leaves_existing_form_untouched(self, chain_table, directory):
        before = TransactionForm(nonce="99", to=SAFE)
        form = InMemoryForm(before)
        process_paste(TRUNCATED_SELECTOR_PASTE, form, chain_table, directory)
        assert form.state == before


class TestUpdateForm:
    def test_zero_is_written(self):
        form = InMemoryForm()
        update_form_with_parsed_data(form, ParsedTransactionFields(value="0", operation="0"))
        assert form.state.value == "0"
        assert form.state.operation == "0"

    def test_bare_addresses_get_prefix(self):
        form = InMemoryForm()
        update_form_with_parsed_data(form, ParsedTransactionFields(safe_address=SAFE[2:], to=RECIPIENT[2:]))
        assert form.state.address == SAFE
        assert form.state.to == RECIPIENT

    def test_absent_fields_skipped(self):
        form = _mock_form()
        update_form_with_parsed_data(form, ParsedTransactionFields(nonce="3"))
        form.set_value.assert_called_once_with("nonce", "3")


class TestCheckMissingFields:
    def test_all_missing(self):
        assert check_missing_fields(ParsedTransactionFields()) == [
            "Safe Address",
            "Recipient address",
            "Transaction value",
            "Transaction data",
            "Network",
            "Operation type",
            "Transaction nonce",
        ]

    def test_zero_counts_as_present(self):
        parsed = ParsedTransactionFields(value="0", operation="0")
        missing = check_missing_fields(parsed)
        assert "Transaction value" not in missing
        assert "Operation type" not in missing

    def test_blank_counts_as_missing(self):
        assert "Transaction nonce" in check_missing_fields(ParsedTransactionFields(nonce="  "))
