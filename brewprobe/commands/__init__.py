from .probe import probe
from .config import config
from .cache import cache
from .log import log
from .version import version
