from invigilation.rules.base import Rule


class ConsecutiveRegularRule(Rule):
    """No regular duty within `gap` slots of another regular duty the same day."""

    order = 30
    name = "ConsecutiveRegular"
    roles = ("regular",)

    def relaxed_by(self, relax) -> bool:
        return relax.allow_consecutive

    def excludes(self, member, ctx, role) -> bool:
        gap = int(self.setting("gap", 1))
        taken = self.state.regular_slots_on(member.faculty_id, ctx.day)
        return any(0 < abs(s - ctx.slot) <= gap for s in taken)
