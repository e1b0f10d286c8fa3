from .primitives import NEWLINE
__all__ = [
	"SEGMENTS",
	"ARITHMETIC",
	"VMWriter",
]
SEGMENTS = (
	'constant',
	'static',
	'local',
	'argument',
	'temp',
)
ARITHMETIC = (
	'add',
	'sub',
	'neg',
	'eq',
	'gt',
	'lt',
	'not',
)
class VMWriter:
	"""
	Collects VM instructions in the order they are generated.
	Nothing reaches the disk until write is called, once, at the end
	"""
	__slots__ = ('lines', 'flushed')
	def __init__(self) -> None:
		self.lines   :list[str] = []
		self.flushed :bool      = False
	def emit(self, line:str) -> None:
		assert not self.flushed, "instructions added after the output was written"
		self.lines.append(line)
	def push(self, segment:str, offset:int) -> None:
		assert segment in SEGMENTS, f"unknown segment '{segment}'"
		self.emit(f"\tpush {segment} {offset}")
	def pop(self, segment:str, offset:int) -> None:
		assert segment in SEGMENTS and segment != 'constant', f"can not pop into '{segment}'"
		self.emit(f"\tpop {segment} {offset}")
	def arithmetic(self, command:str) -> None:
		assert command in ARITHMETIC, f"unknown arithmetic command '{command}'"
		self.emit(f"\t{command}")
	def label(self, label:str) -> None:
		self.emit(f"label {label}")
	def goto(self, label:str) -> None:
		self.emit(f"\tgoto {label}")
	def if_goto(self, label:str) -> None:
		self.emit(f"\tif-goto {label}")
	def call(self, name:str, arg_count:int) -> None:
		self.emit(f"\tcall {name} {arg_count}")
	def function(self, name:str, local_count:int) -> None:
		self.emit(f"function {name} {local_count}")
	def return_(self) -> None:
		self.emit("\treturn")
	@property
	def text(self) -> str:
		if len(self.lines) == 0:
			return ''
		return NEWLINE.join(self.lines)+NEWLINE
	def write(self, file_path:str) -> None:
		assert not self.flushed, "output can be written only once"
		with open(file_path, 'w', encoding='utf-8') as file:
			file.write(self.text)
		self.flushed = True
