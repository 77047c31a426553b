from .output import indent_lines
from .output import log
from .output import log_result
from .output import log_step
from .output import print_msg
