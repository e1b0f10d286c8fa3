"""
Routines that compiled programs call but never define.
The target VM has no multiply instruction, so `a * b` compiles to
`call <module>.mult 2`, and the environment running the code is expected
to provide that function. runtime_support gives a VM implementation of it.
"""
from .primitives import MULT_ROUTINE
from .vm_writer import VMWriter
__all__ = [
	"runtime_support",
]
def runtime_support(module_name:str) -> str:
	writer = VMWriter()
	write_mult(writer, f"{module_name}.{MULT_ROUTINE}")
	return writer.text
def write_mult(writer:VMWriter, name:str) -> None:
	# product of argument 0 and argument 1 by repeated addition,
	# both signs are flipped first when the counter would be negative
	writer.function(name, 2)
	writer.push('argument', 1)
	writer.push('constant', 0)
	writer.arithmetic('lt')
	writer.arithmetic('not')
	writer.if_goto('MULT_START')
	for arg in (0, 1):
		writer.push('argument', arg)
		writer.arithmetic('neg')
		writer.pop('argument', arg)
	writer.label('MULT_START')
	writer.push('constant', 0)
	writer.pop('local', 0)
	writer.push('constant', 0)
	writer.pop('local', 1)
	writer.label('MULT_LOOP')
	writer.push('local', 0)
	writer.push('argument', 1)
	writer.arithmetic('lt')
	writer.arithmetic('not')
	writer.if_goto('MULT_END')
	writer.push('local', 1)
	writer.push('argument', 0)
	writer.arithmetic('add')
	writer.pop('local', 1)
	writer.push('local', 0)
	writer.push('constant', 1)
	writer.arithmetic('add')
	writer.pop('local', 0)
	writer.goto('MULT_LOOP')
	writer.label('MULT_END')
	writer.push('local', 1)
	writer.return_()
