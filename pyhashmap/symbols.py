from dataclasses import dataclass, field
import enum
from typing import Any

from .shared import printf
from .table import Hashmap, create_hashmap
from .value import Directive, NotFound, PutResult, Slot


class DataType(enum.Enum):
    INTEGER = enum.auto()
    REAL = enum.auto()


@dataclass
class Var:
    name: str
    type: DataType
    value: int | float
    scope: int
    addr: int


@dataclass
class Proc:
    name: str
    return_type: DataType
    addr: int
    args_types: list[DataType] = field(default_factory=list)
    args_names: list[str] = field(default_factory=list)


Symbol = Var | Proc


@dataclass
class SymbolTable:
    symbols: Hashmap
    next_addr: int


def init_symbol_table() -> SymbolTable:
    symbols = create_hashmap(2)
    if not isinstance(symbols, Hashmap):
        raise Exception("could not create symbol table", symbols)
    return SymbolTable(symbols=symbols, next_addr=0)


def insert_var(
    table: SymbolTable, name: str, typ: DataType, value: int | float, scope: int
) -> PutResult:
    var = Var(name=name, type=typ, value=value, scope=scope, addr=table.next_addr)
    table.next_addr += 1
    return table.symbols.put(name.encode(), var)


def insert_proc(
    table: SymbolTable, name: str, return_type: DataType, addr: int
) -> PutResult:
    proc = Proc(name=name, return_type=return_type, addr=addr)
    return table.symbols.put(name.encode(), proc)


def lookup(table: SymbolTable, name: str) -> Symbol | NotFound:
    return table.symbols.get(name.encode())


def show_symbol(symbol: Symbol):
    match symbol:
        case Var(type=DataType.INTEGER):
            printf(
                "Var {0:s} (scope {1:d}, addr {2:d}) value {3:d}\n",
                symbol.name,
                symbol.scope,
                symbol.addr,
                symbol.value,
            )
        case Var(type=DataType.REAL):
            printf(
                "Var {0:s} (scope {1:d}, addr {2:d}) value {3:f}\n",
                symbol.name,
                symbol.scope,
                symbol.addr,
                symbol.value,
            )
        case Proc():
            printf(
                "Proc {0:s} (return type {1:s})\n",
                symbol.name,
                "INT" if symbol.return_type == DataType.INTEGER else "REAL",
            )
        case _:
            raise Exception("not a symbol", symbol)


def free_symbol_iterator(context: Any, slot: Slot) -> int:
    match slot.data:
        case Var() | Proc():
            printf("{0:s} has been freed!\n", slot.data.name)
        case _:
            return Directive.STOP
    return Directive.REMOVE


def free_symbol_table(table: SymbolTable):
    table.symbols.destroy_with_ownership(free_symbol_iterator)
