"""Multi-provider sign-in account linking.

Links provider logins (Google, GitHub, email) to a single local account,
detects when two accounts belong to the same person, and merges them.
Account rows and provider links live in PostgreSQL.
"""
