#!/usr/bin/env python3

# this wrapper exists so it can be put into /usr/bin, but still allows the
# python module to be called within the source directory during development

import sys

from osc_iso import babysitter, commandline

osciso = commandline.IsoCommand()

r = babysitter.run(osciso)
sys.exit(r)
