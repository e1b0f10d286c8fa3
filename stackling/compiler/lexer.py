from .primitives import Loc, TT, Token, Config, KEYWORDS, SYMBOLS, DIGITS
class Lexer:
	"""
	Whitespace delimited scanner, every word of the source is one token.
	Tokens are pulled one at a time with next_token
	"""
	__slots__ = ('config', 'file_name', 'lines', 'line', 'words')
	def __init__(self, text:str, config:Config, file_name:str):
		self.config = config
		self.file_name = file_name
		self.lines = iter(text.splitlines())
		self.line = 0
		self.words:list[str] = []
	def next_text(self) -> 'str|None':
		"""next non-blank word of the source, None at the end of it"""
		while len(self.words) == 0:
			line = next(self.lines, None)
			if line is None:
				return None
			self.line+=1
			self.words = line.split()[::-1]
		return self.words.pop()
	def next_token(self) -> Token:
		text = self.next_text()
		loc = Loc(self.file_name, max(self.line, 1))
		if text is None:
			return Token(loc, TT.EOF)
		if text in KEYWORDS:
			return Token(loc, TT.KEYWORD, text)
		if text in SYMBOLS:
			return Token(loc, SYMBOLS[text])
		if is_variable_name(text):
			return Token(loc, TT.WORD, text)
		if is_int_constant(text):
			return Token(loc, TT.CONSTANT, text)
		return Token(loc, TT.INVALID, text)
	def lex(self) -> list[Token]:
		program:list[Token] = []
		token = self.next_token()
		while token.typ != TT.EOF:
			program.append(token)
			token = self.next_token()
		program.append(token)
		return program

def is_variable_name(text:str) -> bool:
	return len(text) > 0 and all(char.isalpha() for char in text)
def is_int_constant(text:str) -> bool:
	return len(text) > 0 and all(char in DIGITS for char in text)

def lex(text:str, config:Config, file_name:str) -> 'list[Token]':
	return Lexer(text, config, file_name).lex()
