import pytest

from stackling.compiler.lexer import Lexer, lex, is_variable_name, is_int_constant
from stackling.compiler.primitives import TT, Config, ErrorBin, KEYWORDS

@pytest.fixture
def config() -> Config:
	return Config.use_defaults(ErrorBin(silent=True), 'Main.txt')

def test_next_text_skips_blank_lines_and_whitespace(config:Config) -> None:
	lexer = Lexer("  program\n\n\t\n   int    a\nendprogram  ", config, 'Main.txt')
	assert [lexer.next_text() for _ in range(5)] == ['program', 'int', 'a', 'endprogram', None]
	assert lexer.next_text() is None

def test_classification(config:Config) -> None:
	tokens = lex("program int abc 42 = == != ( ) + - * > >= < <= a1 ; x_y endprogram", config, 'Main.txt')
	assert [token.typ for token in tokens] == [
		TT.KEYWORD, TT.KEYWORD, TT.WORD, TT.CONSTANT,
		TT.ASSIGN, TT.DOUBLE_EQUALS, TT.NOT_EQUALS,
		TT.LEFT_PARENTHESIS, TT.RIGHT_PARENTHESIS,
		TT.PLUS, TT.MINUS, TT.ASTERISK,
		TT.GREATER, TT.GREATER_OR_EQUAL, TT.LESS, TT.LESS_OR_EQUAL,
		TT.INVALID, TT.INVALID, TT.INVALID,
		TT.KEYWORD, TT.EOF,
	]
	assert tokens[2].operand == 'abc'
	assert tokens[3].operand == '42'
	assert tokens[16].operand == 'a1'

def test_keywords_win_over_variable_names(config:Config) -> None:
	for keyword in KEYWORDS:
		token = Lexer(keyword, config, 'Main.txt').next_token()
		assert token.typ == TT.KEYWORD
		assert token.operand == keyword

def test_keywords_are_case_sensitive(config:Config) -> None:
	token = Lexer("Program", config, 'Main.txt').next_token()
	assert token.typ == TT.WORD

def test_line_numbers(config:Config) -> None:
	tokens = lex("program\n\nint a\n\n\nendprogram\n", config, 'Main.txt')
	assert [token.loc.line for token in tokens] == [1, 3, 3, 6, 6]
	assert str(tokens[1].loc) == 'Main.txt:3'

def test_end_of_input_repeats(config:Config) -> None:
	lexer = Lexer("", config, 'Main.txt')
	assert lexer.next_token().typ == TT.EOF
	assert lexer.next_token().typ == TT.EOF

def test_name_and_constant_syntax() -> None:
	assert is_variable_name('abc')
	assert not is_variable_name('ab1')
	assert not is_variable_name('')
	assert is_int_constant('007')
	assert not is_int_constant('1a')
	assert not is_int_constant('-1')
