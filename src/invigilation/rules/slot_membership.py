from invigilation.rules.base import Rule


class SlotMembershipRule(Rule):
    """One role per faculty member per slot."""

    order = 0
    name = "SlotMembership"
    hard = True

    def excludes(self, member, ctx, role) -> bool:
        return member.faculty_id in ctx.in_slot
