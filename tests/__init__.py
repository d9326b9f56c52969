"""readshelf test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Real databases: migrations, constraints, PostgreSQL paths.
- functional/   : The CLI as an operator uses it (install, db, fixtures, user).
- e2e/          : The whole command with logging and the flight recorder.
- fixtures/     : Shared pytest fixtures (no tests here).

General guidance
- Keep unit fast and deterministic; SQLite in memory or in tmp_path only.
- Functional tests point a throw-away instance at tmp_path through the
  environment (DATABASE_URL, READSHELF_CACHE_DIR, READSHELF_LOG_PATH).
- Anything that starts a container is marked slow and is skipped without Docker.
"""
