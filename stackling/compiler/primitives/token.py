from dataclasses import dataclass, field
from enum import Enum, auto
from .core import Loc
__all__ = [
	'Token',
	'TT',
]
class TT(Enum):
	ASSIGN                = auto()
	ASTERISK              = auto()
	CONSTANT              = auto()
	DOUBLE_EQUALS         = auto()
	EOF                   = auto()
	GREATER               = auto()
	GREATER_OR_EQUAL      = auto()
	INVALID               = auto()
	KEYWORD               = auto()
	LEFT_PARENTHESIS      = auto()
	LESS                  = auto()
	LESS_OR_EQUAL         = auto()
	MINUS                 = auto()
	NOT_EQUALS            = auto()
	PLUS                  = auto()
	RIGHT_PARENTHESIS     = auto()
	WORD                  = auto()
	def __str__(self) -> str:
		names = {
			TT.ASSIGN:'=',
			TT.ASTERISK:'*',
			TT.DOUBLE_EQUALS:'==',
			TT.GREATER:'>',
			TT.GREATER_OR_EQUAL:'>=',
			TT.LEFT_PARENTHESIS:'(',
			TT.LESS:'<',
			TT.LESS_OR_EQUAL:'<=',
			TT.MINUS:'-',
			TT.NOT_EQUALS:'!=',
			TT.PLUS:'+',
			TT.RIGHT_PARENTHESIS:')',
			TT.WORD:'variable',
			TT.CONSTANT:'constant',
			TT.EOF:'end of file',
			TT.INVALID:'invalid token',
		}
		return names.get(self, self.name.lower())
SYMBOLS = {
	'=' :TT.ASSIGN,
	'==':TT.DOUBLE_EQUALS,
	'!=':TT.NOT_EQUALS,
	'(' :TT.LEFT_PARENTHESIS,
	')' :TT.RIGHT_PARENTHESIS,
	'+' :TT.PLUS,
	'-' :TT.MINUS,
	'*' :TT.ASTERISK,
	'>' :TT.GREATER,
	'>=':TT.GREATER_OR_EQUAL,
	'<' :TT.LESS,
	'<=':TT.LESS_OR_EQUAL,
}
@dataclass(slots=True, frozen=True, eq=False)
class Token:
	loc:Loc = field(compare=False)
	typ:TT
	operand:str = ''
	def __str__(self) -> str:
		if self.typ == TT.INVALID:
			return f"invalid token '{self.operand}'"
		if self.operand != '':
			return self.operand
		return str(self.typ)
	def equals(self, typ_or_token:'TT|Token', operand:str|None = None) -> bool:
		if isinstance(typ_or_token, Token):
			operand = typ_or_token.operand
			typ_or_token = typ_or_token.typ
			return self.typ == typ_or_token and self.operand == operand
		if operand is None:
			return self.typ == typ_or_token
		return self.typ == typ_or_token and self.operand == operand

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, (TT, Token)):
			return NotImplemented
		return self.equals(other)

	def __hash__(self) -> int:
		return hash((self.typ, self.operand))
