import pytest

from stackling.compiler.utils import compile_string
from stackling.compiler.primitives import CompileError, ET

def instructions(source:str, entry:str|None = None) -> list[str]:
	return [line.strip() for line in compile_string(source, 'Main', entry).splitlines()]

def compile_error(source:str) -> CompileError:
	with pytest.raises(CompileError) as info:
		compile_string(source)
	return info.value

def test_empty_program() -> None:
	assert instructions("program endprogram") == []

def test_expression_order() -> None:
	source = """
program
def main ( ) int a int b int c
	a = a + b * c
enddef
endprogram
"""
	assert instructions(source) == [
		'function Main.main 3',
		'push local 0',
		'push local 1',
		'push local 2',
		'call Main.mult 2',
		'add',
		'pop local 0',
		'push constant 0',
		'return',
		'label label0',
		'goto label0',
	]

def test_left_associative_subtraction() -> None:
	source = "program def f ( int a int b int c ) a = a - b - c enddef endprogram"
	assert instructions(source)[1:6] == [
		'push argument 0',
		'push argument 1',
		'sub',
		'push argument 2',
		'sub',
	]

def test_parentheses_and_multiplication_chain() -> None:
	source = "program int s def f ( ) s = ( s + 2 ) * 3 * s enddef endprogram"
	assert instructions(source)[1:9] == [
		'push static 0',
		'push constant 2',
		'add',
		'push constant 3',
		'call Main.mult 2',
		'push static 0',
		'call Main.mult 2',
		'pop static 0',
	]

def test_while_with_not_equals() -> None:
	source = """
program
def loop ( int b ) int a
	while ( a != b ) a = a + 1 endwhile
enddef
endprogram
"""
	assert instructions(source) == [
		'function Main.loop 1',
		'label label0',
		'push local 0',
		'push argument 0',
		'eq',
		'if-goto label1',
		'push local 0',
		'push constant 1',
		'add',
		'pop local 0',
		'goto label0',
		'label label1',
		'push constant 0',
		'return',
	]

@pytest.mark.parametrize('operator, expected', [
	('==', ['eq', 'not']),
	('!=', ['eq']),
	('>',  ['gt', 'not']),
	('>=', ['lt']),
	('<',  ['lt', 'not']),
	('<=', ['gt']),
])
def test_comparison_polarity(operator:str, expected:list[str]) -> None:
	source = f"program def f ( int a ) while ( a {operator} 3 ) endwhile enddef endprogram"
	code = instructions(source)
	start = code.index('push constant 3')+1
	assert code[start:code.index('if-goto label1')] == expected

def test_repeat() -> None:
	source = "program def f ( ) int a repeat a = a + 1 until ( a == 10 ) enddef endprogram"
	assert instructions(source) == [
		'function Main.f 1',
		'label label0',
		'push local 0',
		'push constant 1',
		'add',
		'pop local 0',
		'push local 0',
		'push constant 10',
		'eq',
		'not',
		'not',
		'if-goto label1',
		'goto label0',
		'label label1',
		'push constant 0',
		'return',
	]

def test_if_else() -> None:
	source = "program def f ( int a ) if ( a < 1 ) print ( 1 ) else print ( 2 ) endif enddef endprogram"
	assert instructions(source) == [
		'function Main.f 0',
		'push argument 0',
		'push constant 1',
		'lt',
		'not',
		'if-goto label0',
		'push constant 1',
		'call Output.printInt 1',
		'pop temp 0',
		'goto label1',
		'label label0',
		'push constant 2',
		'call Output.printInt 1',
		'pop temp 0',
		'label label1',
		'push constant 0',
		'return',
	]

def test_else_is_required() -> None:
	error = compile_error("program def f ( int a ) if ( a < 1 ) print ( 1 ) endif enddef endprogram")
	assert error.typ == ET.SYNTAX
	assert "expected 'else', found 'endif'" in error.error.msg

def test_labels_are_unique_across_functions() -> None:
	source = """
program
def f ( int a ) while ( a > 0 ) a = a - 1 endwhile enddef
def g ( int a ) if ( a > 0 ) a = 1 else a = 2 endif enddef
def main ( ) repeat print ( 1 ) until ( 1 == 1 ) enddef
endprogram
"""
	labels = [line.split()[1] for line in instructions(source) if line.startswith('label')]
	assert labels == ['label0', 'label1', 'label2', 'label3', 'label4', 'label5', 'label6']

def test_calls() -> None:
	source = """
program
def add ( int a int b ) int r
	r = a + b
	return r
enddef
def main ( ) int x
	call add ( x 1 )
	x = callf add ( ( x + 1 ) callf add ( 2 3 ) )
enddef
endprogram
"""
	code = instructions(source)
	assert code[:7] == [
		'function Main.add 1',
		'push argument 0',
		'push argument 1',
		'add',
		'pop local 0',
		'push local 0',
		'return',
	]
	main = code[code.index('function Main.main 1')+1:]
	assert main == [
		'push local 0',
		'push constant 1',
		'call Main.add 2',
		'pop temp 0',
		'push local 0',
		'push constant 1',
		'add',
		'push constant 2',
		'push constant 3',
		'call Main.add 2',
		'call Main.add 2',
		'pop local 0',
		'push constant 0',
		'return',
		'label label0',
		'goto label0',
	]

def test_call_without_arguments() -> None:
	code = instructions("program def f ( ) call g ( ) enddef endprogram")
	assert code[1:3] == ['call Main.g 0', 'pop temp 0']

def test_function_header_counts_locals_not_arguments() -> None:
	code = instructions("program def f ( int a int b int c ) int d enddef endprogram")
	assert code[0] == 'function Main.f 1'

def test_function_names_are_prefixed_with_module() -> None:
	text = compile_string("program def f ( ) enddef endprogram", 'Shapes')
	assert text.startswith('function Shapes.f 0\n')

def test_custom_entry() -> None:
	code = instructions("program def start ( ) enddef def main ( ) enddef endprogram", entry='start')
	assert code == [
		'function Main.start 0',
		'push constant 0',
		'return',
		'label label0',
		'goto label0',
		'function Main.main 0',
		'push constant 0',
		'return',
	]

def test_output_format() -> None:
	text = compile_string("program def f ( ) print ( 1 ) enddef endprogram")
	assert text == "function Main.f 0\n\tpush constant 1\n\tcall Output.printInt 1\n\tpop temp 0\n\tpush constant 0\n\treturn\n"

def test_local_shadows_static() -> None:
	source = """
program
int x
def f ( ) int x
	x = 5
enddef
def g ( )
	x = 6
enddef
endprogram
"""
	code = instructions(source)
	assert code[1:3] == ['push constant 5', 'pop local 0']
	assert code[code.index('push constant 6')+1] == 'pop static 0'

def test_argument_shadows_static() -> None:
	code = instructions("program int n def f ( int n ) print ( n ) enddef endprogram")
	assert code[1] == 'push argument 0'

def test_recompiling_is_idempotent() -> None:
	source = """
program
int total
def count ( int n ) int i
	while ( i < n ) i = i + 1 total = total + i endwhile
	return i
enddef
def main ( ) print ( callf count ( 4 ) ) enddef
endprogram
"""
	assert compile_string(source) == compile_string(source)

def test_undefined_variable() -> None:
	source = "program\ndef main ( )\n\tprint ( x )\nenddef\nendprogram\n"
	error = compile_error(source)
	assert error.typ == ET.UNDEFINED_VARIABLE
	assert error.loc is not None and error.loc.line == 3
	assert "'x'" in error.error.msg

def test_undefined_assignment_target() -> None:
	error = compile_error("program def f ( ) y = 1 enddef endprogram")
	assert error.typ == ET.UNDEFINED_VARIABLE

def test_variables_of_other_functions_are_not_visible() -> None:
	error = compile_error("program def f ( ) int a enddef def g ( ) a = 1 enddef endprogram")
	assert error.typ == ET.UNDEFINED_VARIABLE

def test_syntax_error_reports_expected_found_and_line() -> None:
	error = compile_error("program\ndef f ( )\nendprogram\n")
	assert error.typ == ET.SYNTAX
	assert error.loc is not None and error.loc.line == 3
	assert error.error.msg == "expected 'enddef', found 'endprogram'"

def test_invalid_token_is_rejected_by_parser() -> None:
	error = compile_error("program def f ( ) int a a = 1a enddef endprogram")
	assert error.typ == ET.INVALID_TOKEN
	assert "1a" in error.error.msg

def test_missing_comparison_operator() -> None:
	error = compile_error("program def f ( int a ) while ( a ) endwhile enddef endprogram")
	assert error.typ == ET.SYNTAX
	assert 'comparison operator' in error.error.msg

def test_text_after_endprogram() -> None:
	error = compile_error("program endprogram def")
	assert error.typ == ET.SYNTAX
	assert 'end of file' in error.error.msg

def test_unexpected_end_of_file() -> None:
	error = compile_error("program def f ( )")
	assert error.error.msg == "expected 'enddef', found end of file"

def test_redefined_variables() -> None:
	assert compile_error("program int a int a endprogram").typ == ET.REDEFINITION
	assert compile_error("program def f ( int a ) int a enddef endprogram").typ == ET.REDEFINITION
	assert compile_error("program def f ( ) int b int b enddef endprogram").typ == ET.REDEFINITION

def test_redefined_function() -> None:
	error = compile_error("program def f ( ) enddef def f ( ) enddef endprogram")
	assert error.typ == ET.REDEFINITION
	assert "function 'f'" in error.error.msg
