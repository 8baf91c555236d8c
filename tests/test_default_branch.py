from contribution_target.domain.entities import Branch, BranchType
from contribution_target.services.default_branch import (
    build_branches_state,
    find_default_branch,
)


def test_prefers_local_branch(local_main, origin_main):
    assert find_default_branch([origin_main, local_main], "main") is local_main


def test_falls_back_to_remote_branch(origin_main, upstream_main):
    assert find_default_branch([upstream_main, origin_main], "main") is origin_main


def test_ignores_other_remotes(upstream_main):
    assert find_default_branch([upstream_main], "main") is None


def test_build_state_uses_fallback_name():
    master = Branch(name="master", type=BranchType.LOCAL)
    main = Branch(name="main", type=BranchType.LOCAL)
    state = build_branches_state([master, main], None)
    assert state.default_branch is main
    assert state.all_branches == (master, main)


def test_build_state_with_unknown_default():
    master = Branch(name="master", type=BranchType.LOCAL)
    state = build_branches_state([master], "trunk")
    assert state.default_branch is None
