BRANCH_REF_PREFIX = "refs/heads/"


def branch_name_from_ref(ref_id: str) -> str:
    """
    Short branch name for a ref.

    Strips a single leading ``refs/heads/``; anything else is returned as is,
    so ``refs/heads/refs/heads/x`` becomes ``refs/heads/x``.
    """
    if ref_id.startswith(BRANCH_REF_PREFIX):
        return ref_id[len(BRANCH_REF_PREFIX) :]
    return ref_id
