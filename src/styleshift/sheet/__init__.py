from styleshift.sheet.model import RuleSheet, TransitionSpec
from styleshift.sheet.transformer import parse_sheet

__all__ = ["parse_sheet", "RuleSheet", "TransitionSpec"]
