from .dashboard import *
from .expenses import *
from .operations import *
from .users import *
from .vehicles import *
