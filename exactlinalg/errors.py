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
"""Exceptions raised by the exactlinalg package

All exceptions derive from ExactLinalgError. Each one also derives from the
builtin exception that describes the same failure, so that code catching
ZeroDivisionError or ValueError keeps working.

A singular matrix is not an error: LU decomposition and inversion report it
by returning None.
"""


class ExactLinalgError(Exception):
    """Base class of all exactlinalg errors."""
    pass


class DivisionByZeroError(ExactLinalgError, ZeroDivisionError):
    """A rational number was divided by zero or built with a zero denominator."""
    pass


class DimensionMismatchError(ExactLinalgError, ValueError):
    """
    Two operands have incompatible sizes.

    Attributes:
        expected: Size required by the operation
        actual: Size that was supplied
    """

    def __init__(self, message: str, expected=None, actual=None):
        if expected is not None or actual is not None:
            message = f"{message} (expected {expected}, got {actual})"
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class InvalidShapeError(ExactLinalgError, ValueError):
    """The operation is not defined for a matrix of this shape."""
    pass


class InvalidParameterError(ExactLinalgError, ValueError):
    """A parameter lies outside of its admissible range."""
    pass
