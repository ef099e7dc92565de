"""
Model package.

IMPORTANT (Alembic / SQLModel):
- Alembic autogenerate relies on `SQLModel.metadata`, which is populated only
  when the table models are imported.
- `alembic/env.py` imports `rental_api.models`, so this module must import all
  SQLModel `table=True` models to register them.
"""

# Import table models so SQLModel registers them in metadata.
from rental_api.account.models import Account  # noqa: F401
from rental_api.profile.models import Booking  # noqa: F401
from rental_api.vehicle.models import Vehicle  # noqa: F401
