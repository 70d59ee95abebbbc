# -*- coding: utf-8 -*-

# -----------------------------------------------------------------------
# Copyright © 2016 Martin de la Gorce <martin[dot]delagorce[hat]gmail[dot]com>

# Permission is hereby granted, free of charge, to any person obtaining
# a copy of this software and associated documentation files (the
# "Software"), to deal in the Software without restriction, including
# without limitation the rights to use, copy, modify, merge, publish,
# distribute, sublicense, and/or sell copies of the Software, and to
# permit persons to whom the Software is furnished to do so, subject to
# the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT
# IN NO EVENT SHALL THE AUTHORS BE LIABLE FOR ANY CLAIM, DAMAGES OR
# OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE,
# ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR
# OTHER DEALINGS IN THE SOFTWARE.
# -----------------------------------------------------------------------
"""Module to download netlib problems."""


import logging
import os
import urllib.request

from .MPSparser import mps_parser

logger = logging.getLogger(__name__)

NETLIB_URL = "ftp://ftp.numerical.rl.ac.uk/pub/cuter/netlib/%s.SIF"


def get_problem_filename(pbname, folder=None):
    if folder is None:
        thisfilepath = os.path.dirname(os.path.abspath(__file__))
        folder = os.path.join(thisfilepath, "data", "netlib")
    return os.path.join(folder, pbname.upper() + ".SIF")


def get_problem(pbname, folder=None, url=NETLIB_URL):
    """Parse the netlib problem pbname, downloading it first if needed."""
    filename_lp = get_problem_filename(pbname, folder)
    os.makedirs(os.path.dirname(filename_lp), exist_ok=True)

    # netlib problems ftp://ftp.numerical.rl.ac.uk/pub/cuter/netlib.tar.gz
    if not os.path.isfile(filename_lp):
        logger.info("downloading %s", pbname.upper())
        partial = filename_lp + ".part"
        try:
            urllib.request.urlretrieve(url % pbname.upper(), partial)
        except BaseException:
            if os.path.exists(partial):
                os.remove(partial)
            raise
        os.replace(partial, filename_lp)

    return mps_parser(filename_lp)


if __name__ == "__main__":

    lp = get_problem("AFIRO")
    print(lp)
