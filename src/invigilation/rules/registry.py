from __future__ import annotations

from typing import Sequence, Tuple, Type

from invigilation.models import Role
from invigilation.rules.base import Relaxation, Rule, RuleSpec
from invigilation.rules.buffer_eligibility import BufferEligibilityRule
from invigilation.rules.consecutive_regular import ConsecutiveRegularRule
from invigilation.rules.daily_regular_cap import DailyRegularCapRule
from invigilation.rules.slot_membership import SlotMembershipRule
from invigilation.rules.target_cap import TargetCapRule

RuleTemplate = Tuple[Type[Rule], int, dict[str, int]]

SLOT_MEMBERSHIP_RULE_TEMPLATE: RuleTemplate = (SlotMembershipRule, 0, {})
BUFFER_ELIGIBILITY_RULE_TEMPLATE: RuleTemplate = (BufferEligibilityRule, 10, {})
TARGET_CAP_RULE_TEMPLATE: RuleTemplate = (TargetCapRule, 20, {})
CONSECUTIVE_REGULAR_RULE_TEMPLATE: RuleTemplate = (
    ConsecutiveRegularRule,
    30,
    {"gap": 1},
)
DAILY_REGULAR_CAP_RULE_TEMPLATE: RuleTemplate = (
    DailyRegularCapRule,
    40,
    {"max_per_day": 1},
)
_DEFAULT_RULE_TEMPLATES: list[RuleTemplate] = [
    SLOT_MEMBERSHIP_RULE_TEMPLATE,
    BUFFER_ELIGIBILITY_RULE_TEMPLATE,
    TARGET_CAP_RULE_TEMPLATE,
    CONSECUTIVE_REGULAR_RULE_TEMPLATE,
    DAILY_REGULAR_CAP_RULE_TEMPLATE,
]

_STRICT = Relaxation()
_MULTI_PER_DAY = Relaxation(allow_multiple_per_day=True)
_OVERFLOW = Relaxation(allow_target_overflow=True, allow_multiple_per_day=True)
_ANYTHING = Relaxation(
    allow_consecutive=True, allow_target_overflow=True, allow_multiple_per_day=True
)

# Tried in order until one rung yields a candidate. The last rung of each
# ladder is the last resort and is reported as a warning when it is used.
RELAXATION_LADDERS: dict[Role, tuple[Relaxation, ...]] = {
    "regular": (_STRICT, _MULTI_PER_DAY, _OVERFLOW, _ANYTHING),
    "reliever": (_MULTI_PER_DAY, _OVERFLOW, _ANYTHING),
    "squad": (_MULTI_PER_DAY, _OVERFLOW, _ANYTHING),
    "buffer": (_OVERFLOW, _ANYTHING),
}


def default_rule_specs() -> list[RuleSpec]:
    """Return fresh copies of the default rule specifications."""
    specs: list[RuleSpec] = []
    for cls, order, settings in _DEFAULT_RULE_TEMPLATES:
        specs.append(RuleSpec(cls=cls, order=order, settings=dict(settings)))
    return specs


def normalize_rule_specs(
    rules: Sequence[RuleSpec | Type[Rule]] | None,
) -> list[RuleSpec]:
    """Turn user-provided rules into RuleSpec objects."""
    if rules is None:
        return default_rule_specs()

    normalized: list[RuleSpec] = []
    for item in rules:
        if isinstance(item, RuleSpec):
            normalized.append(item)
        elif isinstance(item, type) and issubclass(item, Rule):
            normalized.append(RuleSpec(cls=item))
        else:
            raise TypeError(
                "Rules must be RuleSpec instances or Rule subclasses; "
                f"got {type(item)!r}"
            )
    return normalized


def instantiate_rules(state, specs: Sequence[RuleSpec]) -> list[Rule]:
    """Build enabled rules for one run, ordered by spec order then class order."""
    rules: list[Rule] = []
    for spec in specs:
        if not spec.enabled:
            continue
        rule = spec.cls(state, **spec.settings)
        if spec.order is not None:
            rule.order = spec.order
        rules.append(rule)
    rules.sort(key=lambda r: r.order)
    return rules
