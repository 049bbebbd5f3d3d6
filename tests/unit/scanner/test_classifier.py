from tronvault.domain.enums import TxKind
from tronvault.scanner.classifier import classify, contract_parameter, method_selector


def _tx(contract_type: str, value: dict) -> dict:
    return {
        "txID": "aa" * 32,
        "raw_data": {"contract": [{"type": contract_type, "parameter": {"value": value}}]},
    }


class TestClassify:
    def test_transfer_contract_is_native(self):
        tx = _tx("TransferContract", {"owner_address": "41" + "11" * 20, "to_address": "41" + "22" * 20, "amount": 1})
        assert classify(tx) == TxKind.NATIVE_TRANSFER

    def test_trigger_with_transfer_selector(self):
        assert classify(_tx("TriggerSmartContract", {"data": "a9059cbb" + "00" * 64})) == TxKind.TOKEN_CALL

    def test_trigger_with_transfer_from_selector(self):
        assert classify(_tx("TriggerSmartContract", {"data": "23b872dd" + "00" * 96})) == TxKind.TOKEN_CALL

    def test_selector_case_insensitive(self):
        assert classify(_tx("TriggerSmartContract", {"data": "A9059CBB" + "00" * 64})) == TxKind.TOKEN_CALL

    def test_trigger_with_other_selector(self):
        # approve(address,uint256)
        assert classify(_tx("TriggerSmartContract", {"data": "095ea7b3" + "00" * 64})) == TxKind.OTHER

    def test_trigger_without_data(self):
        assert classify(_tx("TriggerSmartContract", {})) == TxKind.OTHER

    def test_other_contract_type(self):
        assert classify(_tx("FreezeBalanceV2Contract", {})) == TxKind.OTHER

    def test_no_contracts(self):
        assert classify({"txID": "x", "raw_data": {"contract": []}}) == TxKind.OTHER
        assert classify({"txID": "x"}) == TxKind.OTHER


class TestHelpers:
    def test_method_selector_short_data(self):
        assert method_selector(_tx("TriggerSmartContract", {"data": "a905"})) is None

    def test_contract_parameter_missing(self):
        assert contract_parameter({"raw_data": {"contract": [{"type": "TransferContract"}]}}) == {}
