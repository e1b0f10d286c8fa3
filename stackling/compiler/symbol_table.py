from dataclasses import dataclass, field
from typing import Iterator
__all__ = [
	"NOT_FOUND",
	"STATIC",
	"ARGUMENT",
	"LOCAL",
	"Symbol",
	"SymbolTable",
	"Scopes",
]
NOT_FOUND = -1
STATIC   = 'static'
ARGUMENT = 'argument'
LOCAL    = 'local'

class SymbolTable:
	"""names of one scope, each with the slot it was given when added"""
	__slots__ = ('table',)
	def __init__(self) -> None:
		self.table:dict[str,int] = {}
	def add(self, name:str) -> int:
		if name in self.table:
			raise KeyError(name)
		offset = len(self.table)
		self.table[name] = offset
		return offset
	def find(self, name:str) -> int:
		return self.table.get(name, NOT_FOUND)
	def __contains__(self, name:object) -> bool:
		return name in self.table
	def __len__(self) -> int:
		return len(self.table)
	def __iter__(self) -> Iterator[str]:
		return iter(self.table)
	def __repr__(self) -> str:
		return f"SymbolTable({self.table})"

@dataclass(slots=True, frozen=True)
class Symbol:
	segment:str
	offset:int

@dataclass(slots=True)
class Scopes:
	static:SymbolTable = field(default_factory=SymbolTable)
	argument:'SymbolTable|None' = None
	local:'SymbolTable|None' = None
	def open_function(self) -> None:
		self.argument = SymbolTable()
		self.local = SymbolTable()
	def close_function(self) -> None:
		self.argument = None
		self.local = None
	def table(self, segment:str) -> SymbolTable:
		table = {STATIC:self.static, ARGUMENT:self.argument, LOCAL:self.local}[segment]
		assert table is not None, f"no '{segment}' scope is open"
		return table
	def chain(self) -> list[tuple[str, SymbolTable]]:
		"""open scopes, innermost first"""
		chain:list[tuple[str, SymbolTable]] = []
		if self.local is not None:
			chain.append((LOCAL, self.local))
		if self.argument is not None:
			chain.append((ARGUMENT, self.argument))
		chain.append((STATIC, self.static))
		return chain
	def resolve(self, name:str) -> 'Symbol|None':
		for segment, table in self.chain():
			offset = table.find(name)
			if offset != NOT_FOUND:
				return Symbol(segment, offset)
		return None
	def conflict(self, segment:str, name:str) -> 'str|None':
		"""segment where declaring name in segment would clash with an earlier declaration"""
		if segment == STATIC:
			return STATIC if name in self.static else None
		for other in (ARGUMENT, LOCAL):
			if name in self.table(other):
				return other
		return None
	def declare(self, segment:str, name:str) -> Symbol:
		return Symbol(segment, self.table(segment).add(name))
