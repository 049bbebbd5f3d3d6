"""Fixed TRC20 transfer ABI with lookup by name or 4-byte selector."""

from eth_utils import event_signature_to_log_topic, function_signature_to_4byte_selector
from pydantic import BaseModel


class AbiParam(BaseModel):
    name: str
    type: str
    indexed: bool = False


class AbiMethod(BaseModel):
    name: str
    type: str  # function | event
    inputs: list[AbiParam]

    @property
    def canonical(self) -> str:
        return f"{self.name}({','.join(p.type for p in self.inputs)})"

    @property
    def function_selector(self) -> str:
        """8 hex chars, no 0x. Only meaningful for functions."""
        return function_signature_to_4byte_selector(self.canonical).hex()

    @property
    def signature(self) -> str:
        """64 hex chars topic hash, no 0x. Only meaningful for events."""
        return event_signature_to_log_topic(self.canonical).hex()

    @property
    def input_types(self) -> list[str]:
        return [p.type for p in self.inputs]


TRC20_ABI: list[AbiMethod] = [
    AbiMethod(
        name="transfer",
        type="function",
        inputs=[AbiParam(name="_to", type="address"), AbiParam(name="_value", type="uint256")],
    ),
    AbiMethod(
        name="transferFrom",
        type="function",
        inputs=[
            AbiParam(name="_from", type="address"),
            AbiParam(name="_to", type="address"),
            AbiParam(name="_value", type="uint256"),
        ],
    ),
    AbiMethod(
        name="Transfer",
        type="event",
        inputs=[
            AbiParam(name="from", type="address", indexed=True),
            AbiParam(name="to", type="address", indexed=True),
            AbiParam(name="value", type="uint256"),
        ],
    ),
]

TRANSFER_METHODS = frozenset({"transfer", "transferFrom"})


def _build_index(abi: list[AbiMethod]) -> dict[str, AbiMethod]:
    index: dict[str, AbiMethod] = {}
    for method in abi:
        index[method.name] = method
        if method.type == "function":
            index[method.function_selector] = method
    return index


_METHODS = _build_index(TRC20_ABI)

# a9059cbb, 23b872dd
TRANSFER_SELECTORS = frozenset(_METHODS[name].function_selector for name in TRANSFER_METHODS)


def get_method(key: str) -> AbiMethod | None:
    """Look up a method/event by name (``transfer``) or selector (``a9059cbb``)."""
    if key in _METHODS:
        return _METHODS[key]
    normalized = key.lower().removeprefix("0x")
    return _METHODS.get(normalized)
