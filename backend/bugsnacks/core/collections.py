"""Document store collection names (schema-in-code).

The store has no DDL or migrations; collections appear on first write.
These constants are the single source of truth for where each entity lives.
"""

COLLECTION_USERS = "users"
COLLECTION_PROJECTS = "projects"
COLLECTION_TEST_REQUESTS = "testRequests"
COLLECTION_BUG_REPORTS = "bugs"
