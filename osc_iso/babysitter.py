# Copyright (C) 2008 Novell Inc.  All rights reserved.
# This program is free software; it may be used, copied, modified
# and distributed under the terms of the GNU General Public Licence,
# either version 2, or (at your option) any later version.


import errno
import signal
import sys
import traceback

from lxml import etree

from . import conf
from . import oscerr


def catchterm(*args):
    raise oscerr.SignalInterrupt


# Signals which should terminate the program safely
for name in 'SIGBREAK', 'SIGHUP', 'SIGTERM':
    num = getattr(signal, name, None)
    if num:
        signal.signal(num, catchterm)


def run(prg, argv=None):
    """
    Run ``prg.main(argv)`` and translate errors into messages and an exit status.
    """
    try:
        try:
            return prg.main(argv) or 0
        except Exception:
            if conf.config["traceback"]:
                traceback.print_exc(file=sys.stderr)
            raise
    except oscerr.SignalInterrupt:
        print('killed!', file=sys.stderr)
    except KeyboardInterrupt:
        print('interrupted!', file=sys.stderr)
        return 130
    except oscerr.WrongArgs as e:
        print(e, file=sys.stderr)
        return 2
    except (oscerr.ConfigError, oscerr.NoConfigfile) as e:
        print(e, file=sys.stderr)
    except oscerr.ExtRuntimeError as e:
        print(e.file + ':', e.msg, file=sys.stderr)
    except oscerr.BuildinfoError as e:
        print(e, file=sys.stderr)
    except oscerr.KeyGenerationError as e:
        print(e.msg, file=sys.stderr)
        if e.stderr:
            print(e.stderr.strip(), file=sys.stderr)
    except oscerr.KiwiError as e:
        print(e, file=sys.stderr)
    except etree.XMLSyntaxError as e:
        print('Malformed XML:', e, file=sys.stderr)
    except OSError as e:
        # ignore broken pipe
        if e.errno == errno.EPIPE:
            return 1
        if e.errno != errno.ENOENT:
            raise
        print(e, file=sys.stderr)
    except oscerr.OscIsoBaseError as e:
        print('*** Error:', e, file=sys.stderr)
    return 1
