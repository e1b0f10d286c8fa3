"""
A small interpreter for the emitted VM text.
It follows the stack machine calling convention closely enough to observe
what a compiled program does: values printed, loops taken, calls made.
Frames are python objects, not a simulated RAM.
"""
from dataclasses import dataclass, field
from typing import Callable
from .core import PRINT_ROUTINE
__all__ = [
	"Instruction",
	"VM",
	"VMError",
	"parse_vm",
	"run_program",
]
TRUE  = -1
FALSE = 0
TEMP_SIZE = 8
DEFAULT_MAX_STEPS = 1_000_000

class VMError(Exception):
	pass

@dataclass(slots=True, frozen=True)
class Instruction:
	op:str
	args:tuple[str, ...]
	line:int
	def __str__(self) -> str:
		return ' '.join((self.op,)+self.args)

@dataclass(slots=True)
class Frame:
	function:str
	args:list[int]
	locals:list[int]
	return_idx:int
	stack:list[int] = field(default_factory=list)

Builtin = Callable[['VM', list[int]], int]

def parse_vm(text:str) -> list[Instruction]:
	instructions:list[Instruction] = []
	for line_number, line in enumerate(text.splitlines(), start=1):
		if '//' in line:
			line = line[:line.find('//')]
		words = line.split()
		if len(words) == 0:
			continue
		instructions.append(Instruction(words[0], tuple(words[1:]), line_number))
	return instructions

def print_int(vm:'VM', args:list[int]) -> int:
	vm.output.append(args[0])
	if vm.echo:
		print(args[0])
	return 0

BINARY_OPERATIONS:dict[str, Callable[[int, int], int]] = {
	'add':lambda a,b: a+b,
	'sub':lambda a,b: a-b,
	'eq' :lambda a,b: TRUE if a == b else FALSE,
	'gt' :lambda a,b: TRUE if a > b else FALSE,
	'lt' :lambda a,b: TRUE if a < b else FALSE,
	'and':lambda a,b: a & b,
	'or' :lambda a,b: a | b,
}
UNARY_OPERATIONS:dict[str, Callable[[int], int]] = {
	'neg':lambda a: -a,
	'not':lambda a: ~a,
}

class VM:
	__slots__ = ('instructions', 'functions', 'labels', 'builtins', 'frames', 'statics', 'temp', 'output', 'echo', 'max_steps', 'steps')
	def __init__(self, text:str, libraries:'tuple[str, ...]' = (), *, echo:bool = False, max_steps:int = DEFAULT_MAX_STEPS) -> None:
		self.instructions :list[Instruction]               = []
		self.functions    :dict[str, int]                  = {}
		self.labels       :dict[tuple[str, str], int]      = {}
		self.builtins     :dict[str, tuple[int, Builtin]]  = {PRINT_ROUTINE:(1, print_int)}
		self.frames       :list[Frame]                     = []
		self.statics      :dict[int, int]                  = {}
		self.temp         :list[int]                       = [0]*TEMP_SIZE
		self.output       :list[int]                       = []
		self.echo         :bool                            = echo
		self.max_steps    :int                             = max_steps
		self.steps        :int                             = 0
		self.load(text, replace=True)
		for library in libraries:
			self.load(library, replace=False)
	def load(self, text:str, replace:bool) -> None:
		"""add the functions of text, library functions never override already loaded ones"""
		function:str|None = None
		skipping = False
		for instruction in parse_vm(text):
			if instruction.op == 'function':
				if len(instruction.args) != 2:
					raise VMError(f"line {instruction.line}: malformed function header '{instruction}'")
				function = instruction.args[0]
				if function in self.functions:
					if replace:
						raise VMError(f"line {instruction.line}: function '{function}' is defined twice")
					skipping = True
					continue
				skipping = False
				self.functions[function] = len(self.instructions)
			elif skipping:
				continue
			elif function is None:
				raise VMError(f"line {instruction.line}: instruction '{instruction}' is outside of any function")
			elif instruction.op == 'label':
				self.labels[(function, instruction.args[0])] = len(self.instructions)
			self.instructions.append(instruction)
	def add_builtin(self, name:str, arg_count:int, builtin:Builtin) -> None:
		self.builtins[name] = (arg_count, builtin)
	@property
	def frame(self) -> Frame:
		return self.frames[-1]
	def run(self, entry:str, args:'list[int]|None' = None) -> list[int]:
		if entry not in self.functions:
			raise VMError(f"entry function '{entry}' is not defined")
		idx = self.enter(entry, [] if args is None else args, -1)
		while idx is not None:
			self.steps+=1
			if self.steps > self.max_steps:
				raise VMError(f"program did not halt in {self.max_steps} steps (in '{self.frame.function}')")
			idx = self.step(idx)
		return self.output
	def enter(self, function:str, args:list[int], return_idx:int) -> int:
		idx = self.functions[function]
		header = self.instructions[idx]
		self.frames.append(Frame(function, args, [0]*int(header.args[1]), return_idx))
		return idx+1
	def step(self, idx:int) -> 'int|None':
		if idx >= len(self.instructions):
			raise VMError(f"execution ran past the end of the program (in '{self.frame.function}')")
		instruction = self.instructions[idx]
		op, args = instruction.op, instruction.args
		stack = self.frame.stack
		try:
			if op == 'push':
				stack.append(self.read(args[0], int(args[1])))
			elif op == 'pop':
				self.write(args[0], int(args[1]), stack.pop())
			elif op in BINARY_OPERATIONS:
				b = stack.pop()
				a = stack.pop()
				stack.append(BINARY_OPERATIONS[op](a, b))
			elif op in UNARY_OPERATIONS:
				stack.append(UNARY_OPERATIONS[op](stack.pop()))
			elif op == 'label':
				pass
			elif op == 'goto':
				target = self.find_label(args[0], instruction)
				if target == idx-1:# 'label L' directly followed by 'goto L' is the halt loop
					return None
				return target
			elif op == 'if-goto':
				if stack.pop() != FALSE:
					return self.find_label(args[0], instruction)
			elif op == 'call':
				return self.call(args[0], int(args[1]), idx)
			elif op == 'return':
				value = stack.pop()
				frame = self.frames.pop()
				if len(self.frames) == 0:
					return None
				self.frame.stack.append(value)
				return frame.return_idx
			elif op == 'function':
				raise VMError(f"line {instruction.line}: execution fell through into '{args[0]}'")
			else:
				raise VMError(f"line {instruction.line}: unknown instruction '{instruction}'")
		except (IndexError, ValueError) as e:
			raise VMError(f"line {instruction.line}: bad access executing '{instruction}' in '{self.frame.function}'") from e
		return idx+1
	def call(self, function:str, arg_count:int, idx:int) -> int:
		stack = self.frame.stack
		if arg_count > len(stack):
			raise VMError(f"call to '{function}' with {arg_count} arguments, but only {len(stack)} values are on the stack")
		args = stack[len(stack)-arg_count:]
		del stack[len(stack)-arg_count:]
		if function in self.functions:
			return self.enter(function, args, idx+1)
		builtin = self.builtins.get(function)
		if builtin is None:
			raise VMError(f"call to undefined function '{function}'")
		expected, implementation = builtin
		if expected != arg_count:
			raise VMError(f"builtin '{function}' takes {expected} arguments, got {arg_count}")
		stack.append(implementation(self, args))
		return idx+1
	def find_label(self, label:str, instruction:Instruction) -> int:
		target = self.labels.get((self.frame.function, label))
		if target is None:
			raise VMError(f"line {instruction.line}: label '{label}' is not defined in '{self.frame.function}'")
		return target
	def read(self, segment:str, offset:int) -> int:
		if segment == 'constant':
			return offset
		if segment == 'static':
			return self.statics.get(offset, 0)
		if segment == 'local':
			return self.frame.locals[offset]
		if segment == 'argument':
			return self.frame.args[offset]
		if segment == 'temp':
			return self.temp[offset]
		raise VMError(f"unknown segment '{segment}'")
	def write(self, segment:str, offset:int, value:int) -> None:
		if segment == 'static':
			self.statics[offset] = value
		elif segment == 'local':
			self.frame.locals[offset] = value
		elif segment == 'argument':
			self.frame.args[offset] = value
		elif segment == 'temp':
			self.temp[offset] = value
		elif segment == 'constant':
			raise VMError("can not pop into the constant segment")
		else:
			raise VMError(f"unknown segment '{segment}'")

def run_program(text:str, entry:str, libraries:'tuple[str, ...]' = (), *, echo:bool = False, max_steps:int = DEFAULT_MAX_STEPS) -> list[int]:
	return VM(text, libraries, echo=echo, max_steps=max_steps).run(entry)
