from ._async import *
from ._exceptions import *
from ._models import *
from ._policies import *
from ._serializers import *
from ._sync import *
from ._utils import generate_key as generate_key

__version__ = "0.1.0"
