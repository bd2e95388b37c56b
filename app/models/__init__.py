# Allocation tracker — Database Models
# Import all models here for SQLAlchemy discovery

from app.models.car import Car                     # noqa
from app.models.match import Match                 # noqa
from app.models.salesperson import Salesperson     # noqa
from app.models.user import User                   # noqa
