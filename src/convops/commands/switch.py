from convops.session import active_session


def switch(
    branch_id: str,
) -> None:
    with active_session() as session:
        known = branch_id in session.engine.get_branches()
        session.engine.switch_to_branch(branch_id)

    print(f"Switched to branch: {branch_id}")
    if not known:
        print(f"Branch '{branch_id}' has no messages yet.")
