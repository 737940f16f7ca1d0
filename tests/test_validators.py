import pytest

from arch_installer.lib.credentials import is_valid_username
from arch_installer.lib.sysconfig import is_valid_hostname, render_hosts


@pytest.mark.parametrize("name", ["arch-node1", "host1", "a", "A-b-C", "x1-y2-z3"])
def test_hostname_accepted(name):
    assert is_valid_hostname(name)


@pytest.mark.parametrize("name", ["-bad", "bad-", "has space", "", " host", "host\t", "dot.ted", "a--b", "under_score"])
def test_hostname_rejected(name):
    assert not is_valid_hostname(name)


@pytest.mark.parametrize("name", ["user_1", "alice", "_", "ALICE9"])
def test_username_accepted(name):
    assert is_valid_username(name)


@pytest.mark.parametrize("name", ["user-1", "user 1", "", "alice!", "al.ice"])
def test_username_rejected(name):
    assert not is_valid_username(name)


def test_render_hosts_has_three_canonical_lines():
    assert render_hosts("archbox").splitlines() == [
        "127.0.0.1\tlocalhost",
        "::1\tlocalhost",
        "127.0.1.1\tarchbox.localdomain archbox",
    ]
