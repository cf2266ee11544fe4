"""Execution engine for deq — Part 2: the operation vocabulary."""
from __future__ import annotations
import operator
from typing import Callable

from .types import (
    DeqType, deq_integer, deq_real, deq_string, deq_bool,
    int_div, int_mod, shift_left, shift_right, real_div,
    parse_integer, parse_real, real_to_integer,
)
from .errors import DeqError, DeqTypeError
from .runtime import Interpreter, HaltSignal, CallFrame

INTEGER = DeqType.INTEGER
REAL = DeqType.REAL
STRING = DeqType.STRING


def _install_operations():
    """Install all operation methods onto the Interpreter class."""

    # --- Shared shapes ---

    def _binary_numeric(self, int_fn: Callable, real_fn: Callable) -> None:
        """Two integers or two reals; no implicit promotion."""
        self.expect(2)
        top = self.pop()
        below = self.pop()
        if below.type == INTEGER or top.type == INTEGER:
            self.typecheck([below, top], [INTEGER, INTEGER])
            try:
                result = int_fn(below.value, top.value)
            except ZeroDivisionError as e:
                raise DeqError(str(e), self.token) from e
            self.push(deq_integer(result, self.ip))
        elif below.type == REAL or top.type == REAL:
            self.typecheck([below, top], [REAL, REAL])
            self.push(deq_real(real_fn(below.value, top.value), self.ip))
        else:
            raise DeqTypeError(
                f"expected two {INTEGER.human(plural=True)} or two {REAL.human(plural=True)}",
                self.token,
            )
        return None

    def _binary_integer(self, fn: Callable, boolean: bool = False) -> None:
        self.expect(2)
        top = self.pop()
        below = self.pop()
        self.typecheck([below, top], [INTEGER, INTEGER])
        try:
            result = fn(below.value, top.value)
        except (ZeroDivisionError, ValueError) as e:
            raise DeqError(str(e), self.token) from e
        self.push(deq_bool(result, self.ip) if boolean else deq_integer(result, self.ip))
        return None

    def _unary_integer(self, fn: Callable) -> None:
        self.expect(1)
        v = self.pop()
        self.typecheck([v], [INTEGER])
        self.push(deq_integer(fn(v.value), self.ip))
        return None

    def _equality(self, negate: bool) -> None:
        self.expect(2)
        top = self.pop()
        below = self.pop()
        if below.type == INTEGER or top.type == INTEGER:
            category = INTEGER
        elif below.type == REAL or top.type == REAL:
            category = REAL
        else:
            category = STRING
        self.typecheck([below, top], [category, category])
        self.push(deq_bool((below.value == top.value) != negate, self.ip))
        return None

    # --- Deq shuffling ---

    def _op_drop(self):
        self.expect(1)
        self.pop()

    def _op_dup(self):
        self.expect(1)
        v = self.pop()
        self.push(v)
        self.push(v)

    def _op_swap(self):
        self.expect(2)
        top = self.pop()
        below = self.pop()
        self.push(top)
        self.push(below)

    def _op_move(self):
        self.expect(1)
        v = self.pop()
        self.push(v, left=not self.effective_left)

    def _op_rot(self):
        self.expect(3)
        top = self.pop()
        below = self.pop()
        under = self.pop()
        self.push(under)
        self.push(top)
        self.push(below)

    def _op_over(self):
        self.expect(2)
        top = self.pop()
        below = self.pop()
        self.push(below)
        self.push(top)
        self.push(below)

    # --- Arithmetic ---

    def _op_add(self):
        return self._binary_numeric(operator.add, operator.add)

    def _op_mul(self):
        return self._binary_numeric(operator.mul, operator.mul)

    def _op_sub(self):
        return self._binary_numeric(operator.sub, operator.sub)

    def _op_div(self):
        return self._binary_numeric(int_div, real_div)

    def _op_mod(self):
        return self._binary_integer(int_mod)

    # --- Bitwise ---

    def _op_shr(self):
        return self._binary_integer(shift_right)

    def _op_shl(self):
        return self._binary_integer(shift_left)

    def _op_band(self):
        return self._binary_integer(operator.and_)

    def _op_bor(self):
        return self._binary_integer(operator.or_)

    def _op_bnot(self):
        return self._unary_integer(operator.invert)

    # --- Comparison and logic ---

    def _op_eq(self):
        return self._equality(negate=False)

    def _op_neq(self):
        return self._equality(negate=True)

    def _op_lt(self):
        return self._binary_integer(operator.lt, boolean=True)

    def _op_lteq(self):
        return self._binary_integer(operator.le, boolean=True)

    def _op_gt(self):
        return self._binary_integer(operator.gt, boolean=True)

    def _op_gteq(self):
        return self._binary_integer(operator.ge, boolean=True)

    def _op_and(self):
        return self._binary_integer(lambda a, b: bool(a) and bool(b), boolean=True)

    def _op_or(self):
        return self._binary_integer(lambda a, b: bool(a) or bool(b), boolean=True)

    def _op_not(self):
        self.expect(1)
        v = self.pop()
        self.typecheck([v], [INTEGER])
        self.push(deq_bool(not v.value, self.ip))

    # --- Control flow ---

    def _op_jmp(self):
        self.expect(1)
        v = self.pop()
        self.typecheck([v], [INTEGER])
        return self.jump_target(v)

    def _conditional_jump(self, when_zero: bool):
        self.expect(2)
        addr = self.pop()
        v = self.pop()
        self.typecheck([v, addr], [INTEGER, INTEGER])
        if (v.value == 0) == when_zero:
            return self.jump_target(addr)
        return None

    def _op_jz(self):
        return self._conditional_jump(when_zero=True)

    def _op_jnz(self):
        return self._conditional_jump(when_zero=False)

    def _op_call(self):
        self.expect(1)
        v = self.pop()
        self.typecheck([v], [INTEGER])
        target = self.jump_target(v)
        self.call_stack.append(CallFrame(self.ip, self.left))
        return target

    def _op_ret(self):
        if not self.call_stack:
            raise DeqError("call stack is empty", self.token)
        frame = self.call_stack.pop()
        return frame.index + 1

    def _op_calldir(self):
        if not self.call_stack:
            raise DeqError("call stack is empty", self.token)
        self.push(deq_bool(self.call_stack[-1].left, self.ip))

    def _op_invertdir(self):
        self.push(deq_bool(self.left, self.ip))
        self.inverted = not self.inverted

    def _op_setinverted(self):
        self.expect(1)
        v = self.pop()
        self.typecheck([v], [INTEGER])
        self.inverted = v.value != 0

    def _op_exit(self):
        raise HaltSignal()

    # --- Output ---

    def _op_print(self):
        self.expect(1)
        self.write(str(self.pop()))

    def _op_println(self):
        self.expect(1)
        self.write(f"{self.pop()}\n")

    def _op_putc(self):
        self.expect(1)
        v = self.pop()
        self.typecheck([v], [INTEGER])
        try:
            ch = chr(v.value)
        except (ValueError, OverflowError) as e:
            raise DeqError(f"invalid character code {v.value}", self.token) from e
        self.write(ch)

    def _op_trace(self):
        self.write(self.trace_line())

    # --- Conversions ---

    def _op_to_real(self):
        self.expect(1)
        v = self.pop()
        if v.type == INTEGER:
            self.push(deq_real(float(v.value), self.ip))
        elif v.type == STRING:
            try:
                value = parse_real(v.value)
            except ValueError as e:
                raise DeqError(f"cannot convert '{v.value}' to a real", self.token) from e
            self.push(deq_real(value, self.ip))
        else:
            raise self.type_error(v, INTEGER, STRING)

    def _op_to_integer(self):
        self.expect(1)
        v = self.pop()
        try:
            if v.type == REAL:
                value = real_to_integer(v.value)
            elif v.type == STRING:
                value = parse_integer(v.value)
            else:
                raise self.type_error(v, REAL, STRING)
        except ValueError as e:
            raise DeqError(f"cannot convert '{v}' to an integer", self.token) from e
        self.push(deq_integer(value, self.ip))

    def _op_to_string(self):
        self.expect(1)
        v = self.pop()
        if v.type == STRING:
            raise self.type_error(v, INTEGER, REAL)
        self.push(deq_string(str(v), self.ip))

    # Install all methods
    methods = {
        '_binary_numeric': _binary_numeric,
        '_binary_integer': _binary_integer,
        '_unary_integer': _unary_integer,
        '_equality': _equality,
        '_conditional_jump': _conditional_jump,
    }
    operations = {
        'drop': _op_drop,
        'dup': _op_dup,
        'swap': _op_swap,
        'move': _op_move,
        'rot': _op_rot,
        'over': _op_over,
        'add': _op_add,
        'mul': _op_mul,
        'sub': _op_sub,
        'div': _op_div,
        'mod': _op_mod,
        'shr': _op_shr,
        'shl': _op_shl,
        'band': _op_band,
        'bor': _op_bor,
        'bnot': _op_bnot,
        'eq': _op_eq,
        'neq': _op_neq,
        'lt': _op_lt,
        'lteq': _op_lteq,
        'gt': _op_gt,
        'gteq': _op_gteq,
        'and': _op_and,
        'or': _op_or,
        'not': _op_not,
        'jmp': _op_jmp,
        'jz': _op_jz,
        'jnz': _op_jnz,
        'call': _op_call,
        'ret': _op_ret,
        'calldir': _op_calldir,
        'invertdir': _op_invertdir,
        'setinverted': _op_setinverted,
        'print': _op_print,
        'println': _op_println,
        'putc': _op_putc,
        '>real': _op_to_real,
        '>integer': _op_to_integer,
        '>string': _op_to_string,
        'trace': _op_trace,
        'exit': _op_exit,
    }
    for name, method in methods.items():
        setattr(Interpreter, name, method)
    for word, method in operations.items():
        setattr(Interpreter, method.__name__, method)
        Interpreter.operations[word] = method.__name__


# Auto-install on import
_install_operations()
