# chirpy

A small HTTP API for a microblogging service. Users sign up with an e-mail
address and a password, log in, and post short messages called *chirps*.
The server also serves static files from the working directory under
`/app/` and counts how often they were requested. Data is kept in an
SQLite database.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Configuration

Settings are read from the environment. A `.env` file in the current
directory is loaded first, if present.

| Variable   | Meaning |
|------------|---------|
| `DB_URL`   | The SQLite database: a plain file path, or `sqlite:///path`. Empty, `sqlite://` or `sqlite:///:memory:` use an in-memory database. Any other `scheme://` URL is rejected. |
| `PLATFORM` | Set to `dev` to allow `POST /admin/reset`; any other value makes it answer 403. |

The tables are created on start-up if they do not exist.

Example `.env`:

```
DB_URL=chirpy.db
PLATFORM=dev
```

## Running

```
chirpy
```

The server listens on `0.0.0.0`, port 8080, using Flask's built-in server.
It takes no options besides `--help`. If the database cannot be opened, it
prints `failed - <reason>` to standard error and exits with status 1.

## Endpoints

| Method | Path                    | Behaviour |
|--------|-------------------------|-----------|
| GET    | `/api/healthz`          | Returns `OK`. |
| any    | `/app/...`              | Static files from the working directory. Every request counts as a hit. Directories serve their `index.html` or a listing; unknown paths give 404. |
| GET    | `/admin/metrics`        | HTML page showing the hit count. |
| POST   | `/admin/reset`          | With `PLATFORM=dev`, sets the hit count to zero and deletes all users (chirps are kept); otherwise 403 `Forbidden`. |
| POST   | `/api/users`            | Creates a user from `{"email": ..., "password": ...}`; responds 201 with the user's `id`, `created_at`, `updated_at` and `email`. Malformed JSON gives 400; a failure to store (such as an e-mail already taken, or a password over 72 bytes) gives 500. |
| POST   | `/api/login`            | Checks e-mail and password; responds 200 with the user, or 401 `Incorrect email or password`. |
| POST   | `/api/chirps`           | Creates a chirp from `{"body": ..., "user_id": ...}`; responds 201 with the chirp. |
| GET    | `/api/chirps`           | Lists all chirps, oldest first. |
| GET    | `/api/chirps/<chirpID>` | Returns one chirp; an unknown or malformed id gives 500. |

JSON keys in request bodies are matched without regard to letter case, and
unknown keys are ignored.

Chirps must be sent with a `Content-Type` containing `application/json`,
otherwise the answer is 400 `{"error": "Something went wrong"}`. A body
longer than 140 bytes (UTF-8) gives 400 `{"error": "Chirp is too long"}`.
The words "kerfuffle", "sharbert" and "fornax" (in any letter case, as whole
space-separated words) are replaced by `****` before the chirp is stored.

In the two GET chirp endpoints, the `user_id` field of each chirp holds the
chirp's own id rather than its author's.

Example session:

```
curl -X POST localhost:8080/api/users \
     -H 'Content-Type: application/json' \
     -d '{"email": "user@example.com", "password": "password"}'

curl -X POST localhost:8080/api/login \
     -H 'Content-Type: application/json' \
     -d '{"email": "user@example.com", "password": "password"}'
```

## Using it as a library

- `chirpy.auth.hash_password` hashes a password with bcrypt at cost 4
  (raising `ValueError` for passwords over 72 bytes), and
  `chirpy.auth.check_password_hash` raises
  `chirpy.auth.PasswordMismatchError` when the password does not match.
- `chirpy.models.Chirp` and `chirpy.models.User` are frozen dataclasses;
  their `to_json()` methods return JSON-ready mappings (a user's mapping
  leaves out the password hash).
- `chirpy.database.connect` opens an SQLite connection from a URL or path,
  and `chirpy.database.Queries` wraps it with `create_schema`,
  `create_chirp`, `get_all_chirps`, `get_chirp_by_id`, `create_user`,
  `delete_all_users` and `get_user_by_email`. A missing row raises
  `chirpy.database.NotFoundError`.
- `chirpy.handlers.create_app` builds the Flask application from a
  `chirpy.handlers.ApiConfig` and a directory of static files;
  `chirpy.handlers.replace_profanities` is the chirp filter on its own.
- `chirpy.server.get_config` builds the configuration from the environment
  and an env file, and `chirpy.server.main` runs the server.

## What it does not do

There is no session or token handling: logging in only checks the
credentials, and creating a chirp does not check that its `user_id` belongs
to an existing or logged-in user. Chirps cannot be edited or deleted.