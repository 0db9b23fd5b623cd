from ..extensions import db

# Core Models
from .user import User, TokenBlocklist
from .farmer import Farmer
from .land import Land
from .agreement import Agreement
from .crop import Crop
from .parchi import Parchi
from .payment import Payment
