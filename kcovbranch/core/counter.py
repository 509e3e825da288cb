from __future__ import annotations


class BranchCounter:
    """Sequential branch ids and the running branch-weight total for one traversal."""

    def __init__(self) -> None:
        self.next_id = 0
        self.total = 0

    def allocate(self, weight: int) -> int:
        branch_id = self.next_id
        self.next_id += 1
        self.total += weight
        return branch_id

    @property
    def count(self) -> int:
        return self.next_id
