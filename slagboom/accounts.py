import secrets


class DictAccounts:
    """Accounts in a dictionary, as a verify function for the gate"""

    def __init__(self, accounts: dict = None):
        self.accounts = {}
        if accounts is not None:
            self.accounts.update(accounts)

    def __call__(self, username: str, password: str) -> bool:
        """Password matches the one for user"""
        expected = self.accounts.get(username)
        if expected is None:
            return False
        return secrets.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))
