"""Back-office persistence: trading entries, accounts, users, leave and attendance."""
