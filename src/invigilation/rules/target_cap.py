from invigilation.rules.base import Rule


class TargetCapRule(Rule):
    """
    Keep faculty at or above their role target out of the pool while someone
    below target is still available.
    """

    order = 20
    name = "TargetCap"
    roles = ("regular", "reliever", "squad")
    guards_pool = True

    def relaxed_by(self, relax) -> bool:
        return relax.allow_target_overflow

    def excludes(self, member, ctx, role) -> bool:
        return not self.state.counts[member.faculty_id].below_target(role)
