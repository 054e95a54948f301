"""
Sieve expression compiler.

Turns text such as ``!3@1 & 6@2 | !(10@0 | 2@0 | 3@0)`` into a combination
tree in two passes: a shunting-yard pass producing postfix tokens, then a
stack machine that folds the postfix tokens into nodes.

Grammar:
    expr     := term ( ('|' | '&' | '^') term )*
    term     := '!' term | '(' expr ')' | residual
    residual := <digits> '@' <digits>

Precedence, highest first: ! & ^ |
"""

import logging
import re
from collections import deque
from typing import Deque, Iterable, List, Optional, Tuple

from .residual import Residual
from .tree import (
    Node, Unit, Intersection, Union, SymmetricDifference, Inversion,
)

logger = logging.getLogger(__name__)


class ExpressionError(ValueError):
    """Base class for errors raised while compiling a sieve expression."""

    def __init__(self, message: str, expression: Optional[str] = None):
        self.message = message
        self.expression = expression
        if expression is not None:
            message = f"{message} in expression '{expression}'"
        super().__init__(message)


class InvalidResidualError(ExpressionError):
    """Operand is not of the form <digits>@<digits>."""

    def __init__(self, token: str, expression: Optional[str] = None):
        self.token = token
        super().__init__(f"Invalid residual literal '{token}'", expression)


class UnsupportedCharacterError(ExpressionError):
    """Expression contains a character outside the grammar."""

    def __init__(self, char: str, position: int, expression: Optional[str] = None):
        self.char = char
        self.position = position
        super().__init__(
            f"Unsupported operator/character '{char}' at position {position}",
            expression,
        )


class MissingOperandError(ExpressionError):
    """An operator found too few operands on the stack."""

    def __init__(self, operator: str, expression: Optional[str] = None):
        self.operator = operator
        super().__init__(f"Missing operand for '{operator}'", expression)


class InvalidExpressionError(ExpressionError):
    """Expression does not reduce to exactly one tree."""


PRECEDENCE = {
    '!': 4,
    '&': 3,
    '^': 2,
    '|': 1,
}

BINARY_NODES = {
    '&': Intersection,
    '^': SymmetricDifference,
    '|': Union,
}

OPERAND_CHARS = set('0123456789@')

RESIDUAL_PATTERN = re.compile(r'(\d+)@(\d+)', re.ASCII)


def infix_to_postfix(expr: str) -> Deque[str]:
    """
    Convert an infix sieve expression to postfix tokens.

    Example:
        infix_to_postfix("10@0 | 2@0 & 3@0") -> deque(['10@0', '2@0', '3@0', '&', '|'])

    Raises:
        UnsupportedCharacterError: For characters outside the grammar
        InvalidExpressionError: For unbalanced parentheses
    """
    post: Deque[str] = deque()
    operators: List[str] = []
    operand: List[str] = []

    def collect_operand():
        if operand:
            post.append(''.join(operand))
            operand.clear()

    for pos, c in enumerate(expr):
        if c in OPERAND_CHARS:
            operand.append(c)
        elif c == '!':
            collect_operand()
            operators.append(c)
        elif c in BINARY_NODES:
            collect_operand()
            while operators:
                top = operators[-1]
                if top == '(' or PRECEDENCE[top] < PRECEDENCE[c]:
                    break
                post.append(operators.pop())
            operators.append(c)
        elif c == '(':
            collect_operand()
            operators.append(c)
        elif c == ')':
            collect_operand()
            while True:
                if not operators:
                    raise InvalidExpressionError(
                        f"Unbalanced ')' at position {pos}", expr)
                top = operators.pop()
                if top == '(':
                    break
                post.append(top)
        elif c.isspace():
            continue
        else:
            raise UnsupportedCharacterError(c, pos, expr)

    collect_operand()
    while operators:
        op = operators.pop()
        if op == '(':
            raise InvalidExpressionError("Unbalanced '('", expr)
        post.append(op)

    return post


def residual_to_ints(token: str, expression: Optional[str] = None) -> Tuple[int, int]:
    """
    Split a residual literal into (modulus, shift).

    Raises:
        InvalidResidualError: Unless token has exactly one '@' between two
            non-negative integers
    """
    match = RESIDUAL_PATTERN.fullmatch(token)
    if not match:
        raise InvalidResidualError(token, expression)
    try:
        return int(match.group(1)), int(match.group(2))
    except ValueError as e:
        # digit strings past the interpreter's int conversion limit
        raise InvalidResidualError(token, expression) from e


def postfix_to_tree(tokens: Iterable[str], expression: Optional[str] = None) -> Node:
    """
    Fold postfix tokens into a single combination tree.

    Raises:
        InvalidResidualError: For malformed operand tokens
        MissingOperandError: When an operator underflows the stack
        InvalidExpressionError: When zero or several trees remain
    """
    stack: List[Node] = []

    for token in tokens:
        if token == '!':
            if not stack:
                raise MissingOperandError(token, expression)
            stack.append(Inversion(stack.pop()))
        elif token in BINARY_NODES:
            if len(stack) < 2:
                raise MissingOperandError(token, expression)
            right = stack.pop()
            left = stack.pop()
            stack.append(BINARY_NODES[token](left, right))
        else:
            modulus, shift = residual_to_ints(token, expression)
            stack.append(Unit(Residual(modulus, shift)))

    if not stack:
        raise InvalidExpressionError("Expression is empty", expression)
    if len(stack) > 1:
        dangling = ', '.join(str(node) for node in stack[:-1])
        raise InvalidExpressionError(f"Dangling operands ({dangling})", expression)
    return stack[0]


def parse(expr: str) -> Node:
    """Compile a sieve expression into a combination tree."""
    post = infix_to_postfix(expr)
    logger.debug("Postfix for '%s': %s", expr, " ".join(post))
    node = postfix_to_tree(post, expr)
    logger.debug("Compiled '%s' to %s", expr, node)
    return node
