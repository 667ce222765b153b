"""Display labels for engine codes. Translation happens only at render time."""

from src.engine.base import Side, SideId, WealthCode

WEALTH_LABELS: dict[str, str] = {
    WealthCode.POOR.value: "Pobre",
    WealthCode.RICH.value: "Rico",
    WealthCode.MILLIONAIRE.value: "Milionário",
}


def get_wealth_label(code: str) -> str:
    """Human label for a wealth code; unknown codes are shown as-is."""
    return WEALTH_LABELS.get(code, code)


def get_option_label(side: Side, option_index: int) -> str:
    """Display text of one option; wealth codes become their labels."""
    value = side.options[option_index].value
    return get_wealth_label(value) if side.id == SideId.WEALTH else value
