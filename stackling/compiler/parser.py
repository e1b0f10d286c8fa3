from typing import NoReturn

from .primitives import TT, Token, Config, ET, LabelAllocator, MULT_ROUTINE, PRINT_ROUTINE
from .lexer import Lexer
from .symbol_table import Scopes, Symbol, STATIC, ARGUMENT, LOCAL
from .vm_writer import VMWriter
__all__ = [
	"Parser",
	"COMPARISONS",
]
STATEMENT_KEYWORDS = (
	'call',
	'return',
	'while',
	'print',
	'repeat',
	'if',
)
# the branch after a condition is taken when the condition is false,
# so every comparison leaves the negation of its truth value
COMPARISONS:dict[TT, tuple[str, bool]] = {
	TT.DOUBLE_EQUALS   :('eq', True),
	TT.NOT_EQUALS      :('eq', False),
	TT.GREATER         :('gt', True),
	TT.GREATER_OR_EQUAL:('lt', False),
	TT.LESS            :('lt', True),
	TT.LESS_OR_EQUAL   :('gt', False),
}
class Parser:
	"""
	Recursive descent over the token stream, with one token of lookahead.
	Code is generated while each rule is recognized; there is no tree.
	The first error stops the translation with a CompileError
	"""
	__slots__ = ('lexer', 'config', 'module_name', 'entry', 'current', 'scopes', 'labels', 'writer', 'functions')
	def __init__(self, lexer:Lexer, config:Config, writer:'VMWriter|None' = None, labels:'LabelAllocator|None' = None) -> None:
		self.lexer        :Lexer           = lexer
		self.config       :Config          = config
		self.module_name  :str             = config.module_name
		self.entry        :str             = config.entry
		self.scopes       :Scopes          = Scopes()
		self.labels       :LabelAllocator  = LabelAllocator() if labels is None else labels
		self.writer       :VMWriter        = VMWriter() if writer is None else writer
		self.functions    :list[str]       = []
		self.current      :Token           = lexer.next_token()
	def adv(self) -> Token:
		"""advance current token, and return what was current"""
		ret = self.current
		self.current = self.lexer.next_token()
		return ret
	def expect(self, typ:TT, operand:str|None = None) -> Token:
		if not self.current.equals(typ, operand):
			self.syntax_error(f"'{operand}'" if operand is not None else describe_type(typ))
		return self.adv()
	def expect_keyword(self, keyword:str) -> Token:
		return self.expect(TT.KEYWORD, keyword)
	def syntax_error(self, expected:str) -> NoReturn:
		found = self.current
		self.config.errors.critical_error(
			ET.INVALID_TOKEN if found.typ == TT.INVALID else ET.SYNTAX,
			found.loc,
			f"expected {expected}, found {describe_token(found)}",
		)
	def qualified(self, name:str) -> str:
		return f"{self.module_name}.{name}"
	def resolve(self, name:Token) -> Symbol:
		symbol = self.scopes.resolve(name.operand)
		if symbol is None:
			self.config.errors.critical_error(ET.UNDEFINED_VARIABLE, name.loc, f"undefined variable '{name.operand}'")
		return symbol
	def declare(self, segment:str, name:Token) -> Symbol:
		conflict = self.scopes.conflict(segment, name.operand)
		if conflict is not None:
			self.config.errors.critical_error(ET.REDEFINITION, name.loc, f"variable '{name.operand}' is already defined as {conflict} variable")
		return self.scopes.declare(segment, name.operand)

	def parse(self) -> VMWriter:
		self.parse_program()
		return self.writer
	def parse_program(self) -> None:
		self.expect_keyword('program')
		self.parse_var_def_list(STATIC)
		while self.current.equals(TT.KEYWORD, 'def'):
			self.parse_fun_definition()
		self.expect_keyword('endprogram')
		if self.current.typ != TT.EOF:
			self.syntax_error(describe_type(TT.EOF))
	def parse_var_def_list(self, segment:str) -> int:
		count = 0
		while self.current.equals(TT.KEYWORD, 'int'):
			self.adv()
			self.declare(segment, self.expect(TT.WORD))
			count+=1
		return count
	def parse_fun_definition(self) -> None:
		self.expect_keyword('def')
		name = self.expect(TT.WORD)
		if name.operand in self.functions:
			self.config.errors.critical_error(ET.REDEFINITION, name.loc, f"function '{name.operand}' is already defined")
		self.functions.append(name.operand)
		self.expect(TT.LEFT_PARENTHESIS)
		self.scopes.open_function()
		arg_count = self.parse_var_def_list(ARGUMENT)
		self.expect(TT.RIGHT_PARENTHESIS)
		local_count = self.parse_var_def_list(LOCAL)
		self.writer.function(self.qualified(name.operand), local_count)
		self.parse_statement_list()
		self.expect_keyword('enddef')
		self.writer.push('constant', 0)
		self.writer.return_()
		if name.operand == self.entry:
			halt = self.labels.new_label()
			self.writer.label(halt)
			self.writer.goto(halt)
		self.scopes.close_function()
		if self.config.verbose:
			print(f"INFO: Function '{self.qualified(name.operand)}' compiled with {arg_count} arguments and {local_count} locals")
	def parse_statement_list(self) -> None:
		while self.current == TT.WORD or (self.current == TT.KEYWORD and self.current.operand in STATEMENT_KEYWORDS):
			self.parse_statement()
	def parse_statement(self) -> None:
		if self.current == TT.WORD:
			self.parse_assignment()
		elif self.current.equals(TT.KEYWORD, 'call'):
			self.adv()
			name = self.expect(TT.WORD)
			arg_count = self.parse_expression_list()
			self.writer.call(self.qualified(name.operand), arg_count)
			self.writer.pop('temp', 0)
		elif self.current.equals(TT.KEYWORD, 'return'):
			self.adv()
			symbol = self.resolve(self.expect(TT.WORD))
			self.writer.push(symbol.segment, symbol.offset)
			self.writer.return_()
		elif self.current.equals(TT.KEYWORD, 'while'):
			self.parse_while()
		elif self.current.equals(TT.KEYWORD, 'print'):
			self.adv()
			self.expect(TT.LEFT_PARENTHESIS)
			self.parse_expression()
			self.expect(TT.RIGHT_PARENTHESIS)
			self.writer.call(PRINT_ROUTINE, 1)
			self.writer.pop('temp', 0)
		elif self.current.equals(TT.KEYWORD, 'repeat'):
			self.parse_repeat()
		elif self.current.equals(TT.KEYWORD, 'if'):
			self.parse_if()
		else:
			self.syntax_error("statement")
	def parse_assignment(self) -> None:
		symbol = self.resolve(self.expect(TT.WORD))
		self.expect(TT.ASSIGN)
		self.parse_expression()
		self.writer.pop(symbol.segment, symbol.offset)
	def parse_while(self) -> None:
		self.expect_keyword('while')
		top, end = self.labels.new_label(), self.labels.new_label()
		self.writer.label(top)
		self.parse_condition()
		self.writer.if_goto(end)
		self.parse_statement_list()
		self.expect_keyword('endwhile')
		self.writer.goto(top)
		self.writer.label(end)
	def parse_repeat(self) -> None:
		self.expect_keyword('repeat')
		top, end = self.labels.new_label(), self.labels.new_label()
		self.writer.label(top)
		self.parse_statement_list()
		self.expect_keyword('until')
		self.parse_condition()
		self.writer.arithmetic('not')
		self.writer.if_goto(end)
		self.writer.goto(top)
		self.writer.label(end)
	def parse_if(self) -> None:
		self.expect_keyword('if')
		else_label, end = self.labels.new_label(), self.labels.new_label()
		self.parse_condition()
		self.writer.if_goto(else_label)
		self.parse_statement_list()
		self.expect_keyword('else')
		self.writer.goto(end)
		self.writer.label(else_label)
		self.parse_statement_list()
		self.expect_keyword('endif')
		self.writer.label(end)
	def parse_condition(self) -> None:
		self.expect(TT.LEFT_PARENTHESIS)
		self.parse_expression()
		operation = self.current
		if operation.typ not in COMPARISONS:
			self.syntax_error("comparison operator")
		self.adv()
		self.parse_expression()
		self.expect(TT.RIGHT_PARENTHESIS)
		command, negate = COMPARISONS[operation.typ]
		self.writer.arithmetic(command)
		if negate:
			self.writer.arithmetic('not')
	def parse_expression_list(self) -> int:
		self.expect(TT.LEFT_PARENTHESIS)
		count = 0
		while self.starts_expression():
			self.parse_expression()
			count+=1
		self.expect(TT.RIGHT_PARENTHESIS)
		return count
	def starts_expression(self) -> bool:
		return self.current.typ in (TT.WORD, TT.CONSTANT, TT.LEFT_PARENTHESIS) or self.current.equals(TT.KEYWORD, 'callf')
	def parse_expression(self) -> None:
		self.parse_term()
		while self.current.typ in (TT.PLUS, TT.MINUS):
			operation = self.adv()
			self.parse_term()
			self.writer.arithmetic('add' if operation.typ == TT.PLUS else 'sub')
	def parse_term(self) -> None:
		self.parse_factor()
		while self.current == TT.ASTERISK:
			self.adv()
			self.parse_factor()
			self.writer.call(self.qualified(MULT_ROUTINE), 2)
	def parse_factor(self) -> None:
		if self.current == TT.WORD:
			symbol = self.resolve(self.adv())
			self.writer.push(symbol.segment, symbol.offset)
		elif self.current == TT.CONSTANT:
			self.writer.push('constant', int(self.adv().operand))
		elif self.current == TT.LEFT_PARENTHESIS:
			self.adv()
			self.parse_expression()
			self.expect(TT.RIGHT_PARENTHESIS)
		elif self.current.equals(TT.KEYWORD, 'callf'):
			self.adv()
			name = self.expect(TT.WORD)
			arg_count = self.parse_expression_list()
			self.writer.call(self.qualified(name.operand), arg_count)
		else:
			self.syntax_error("variable, constant, '(' or 'callf'")

def describe_type(typ:TT) -> str:
	if typ in (TT.WORD, TT.CONSTANT, TT.EOF):
		return str(typ)
	return f"'{typ}'"
def describe_token(token:Token) -> str:
	if token.typ == TT.WORD:
		return f"variable '{token.operand}'"
	if token.typ == TT.CONSTANT:
		return f"constant '{token.operand}'"
	if token.typ in (TT.EOF, TT.INVALID):
		return str(token)
	return f"'{token}'"
