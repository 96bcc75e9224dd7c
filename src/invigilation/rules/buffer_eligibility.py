from invigilation.rules.base import Rule


class BufferEligibilityRule(Rule):
    """Buffer duty is open only to designations flagged buffer-eligible."""

    order = 10
    name = "BufferEligibility"
    roles = ("buffer",)
    hard = True

    def excludes(self, member, ctx, role) -> bool:
        return not self.state.structure.buffer_eligible(member.designation)
