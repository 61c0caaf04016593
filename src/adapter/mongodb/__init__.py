"""MongoDB adapters. Collection names shared by the repositories."""

USERS_COLLECTION_NAME = 'users'
SESSIONS_COLLECTION_NAME = 'sessions'
