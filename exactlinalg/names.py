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
"""Static names and default settings used in the exactlinalg package

    Rational arithmetic

        REDUCTION_THRESHOLD = 2**128
            Numerators or denominators of at least this magnitude are
            reduced by their gcd right away. Smaller fractions may stay
            unreduced, which is invisible to comparison and equality.

        DEFAULT_DECIMAL_ROUNDING = decimal.ROUND_HALF_UP

    Gauss-Jordan phases

        ECHELON = 'echelon'

        REDUCED = 'reduced'

    Gram-Schmidt phases

        ORTHOGONAL = 'orthogonal'

    Lattice reduction

        DEFAULT_DELTA = (99, 100)

        MIN_DELTA = (1, 4)  (exclusive)

        MAX_DELTA = (1, 1)  (inclusive)
"""

import decimal

REDUCTION_THRESHOLD = 1 << 128
DEFAULT_DECIMAL_ROUNDING = decimal.ROUND_HALF_UP

ECHELON = 'echelon'
REDUCED = 'reduced'
GAUSS_JORDAN_PHASES = (ECHELON, REDUCED)

ORTHOGONAL = 'orthogonal'

DEFAULT_DELTA = (99, 100)
MIN_DELTA = (1, 4)
MAX_DELTA = (1, 1)
