from slagboom.accounts import DictAccounts


def test_dict_accounts():
    verify = DictAccounts({"Boss": "pass:word"})
    assert verify("Boss", "pass:word")
    assert not verify("Boss", "password")
    assert not verify("joe", "pass:word")


def test_dict_accounts_empty():
    assert not DictAccounts()("Boss", "")
