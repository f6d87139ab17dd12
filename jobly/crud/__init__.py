"""
CRUD operations (Create, Read, Update, Delete) for the API resources.

This layer provides a clean separation between API routes and database
operations, following the Repository pattern. SQL fragments come from the
`sql` (partial updates), `filters` (listing predicates) and `params`
(query string parsing) helpers.
"""

from jobly.crud import company, job, user

__all__ = ["company", "job", "user"]
