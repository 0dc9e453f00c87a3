#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""exactlinalg package for linear algebra and lattice reduction over exact rationals"""

from .names import *
import logging


class DisableLogger():
    """Environment in which logging is disabled"""

    def __enter__(self):
        logging.disable(logging.CRITICAL)

    def __exit__(self, exit_type, exit_value, exit_traceback):
        logging.disable(logging.NOTSET)


from .errors import *
from .rational import Rational, RationalLike, ZERO, HALF, ONE, MINUS_ONE
from .vector import Vector, SUM, EUCLIDEAN_SQ
from .matrix import Matrix, row_getter, row_setter, column_getter, column_setter
from .lu_decomposition import LUDecomposition
from . import gauss_jordan
from . import gram_schmidt
from .lattice import LagrangeGauss, LLL
from .polynomial import Polynomial
from .conversions import *
