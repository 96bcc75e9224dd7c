from invigilation.rules.base import Rule


class DailyRegularCapRule(Rule):
    """
    At most `max_per_day` regular duties per faculty per day, enforced only
    while faculty below their regular target remain in the pool.
    """

    order = 40
    name = "DailyRegularCap"
    roles = ("regular",)
    guards_pool = True

    def relaxed_by(self, relax) -> bool:
        return relax.allow_multiple_per_day

    def excludes(self, member, ctx, role) -> bool:
        cap = int(self.setting("max_per_day", 1))
        return len(self.state.regular_slots_on(member.faculty_id, ctx.day)) >= cap
