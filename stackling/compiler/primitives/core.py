from dataclasses import dataclass, field
from enum import Enum, auto
import os
import sys
from typing import NoReturn
__all__ = (
	#constants
	"DIGITS",
	"ENTRY_FUNCTION",
	"KEYWORDS",
	"MULT_ROUTINE",
	"NEWLINE",
	"PRINT_ROUTINE",
	#functions
	"process_cmd_args",
	"extract_file_text_from_file_path",
	"module_name_from_file_path",
	#classes
	"Loc",
	"Config",
	"ET",
	"Error",
	"ErrorBin",
	"ErrorExit",
	"CompileError",
)
KEYWORDS = (
	'program',
	'endprogram',
	'def',
	'enddef',
	'int',

	'if',
	'else',
	'endif',
	'while',
	'endwhile',
	'repeat',
	'until',

	'print',
	'call',
	'callf',
	'return',
)
NEWLINE       = '\n'
DIGITS        = "0123456789"
ENTRY_FUNCTION = 'main'
MULT_ROUTINE  = 'mult'
PRINT_ROUTINE = 'Output.printInt'


@dataclass(slots=True, frozen=True)
class Loc:
	file_path:str
	line:int
	def __str__(self) -> str:
		return f"{self.file_path}:{self.line}"

class ErrorExit(SystemExit):
	pass

class ET(Enum):# Error Type
	CMD_ENTRY_NAME      = auto()
	CMD_FILE            = auto()
	CMD_FLAG            = auto()
	CMD_OUTPUT_NAME     = auto()
	CMD_O_NAME          = auto()
	CMD_SUBFLAG         = auto()
	FILE                = auto()
	INVALID_TOKEN       = auto()
	REDEFINITION        = auto()
	RUN                 = auto()
	SYNTAX              = auto()
	UNDEFINED_VARIABLE  = auto()
	def __str__(self) -> str:
		return f"{self.name.lower().replace('_','-')}"

@dataclass(slots=True, frozen=True)
class Error:
	loc:'Loc|None'
	typ:ET
	msg:str
	def __str__(self) -> str:
		loc = f"{self.loc}: " if self.loc is not None else ''
		return f"\x1b[91mERROR:\x1b[0m {loc}{self.msg} [{self.typ}]"

class CompileError(Exception):
	"""First fatal error of a compilation, handed to whoever started it"""
	def __init__(self, error:Error) -> None:
		super().__init__(f"{error.loc}: {error.msg}" if error.loc is not None else error.msg)
		self.error = error
	@property
	def typ(self) -> ET:
		return self.error.typ
	@property
	def loc(self) -> 'Loc|None':
		return self.error.loc

@dataclass(slots=True, frozen=True)
class ErrorBin:
	silent:bool = False
	errors:'list[Error]' = field(default_factory=list)
	def add_error(self, err:ET,loc:'Loc|None',msg:'str') -> None:
		self.errors.append(Error(loc,err,msg))
		return None

	def show_errors(self) -> None|NoReturn:
		if len(self.errors) == 0:
			return None
		self.crash_with_errors()

	def print_errors(self) -> None:
		if self.silent:
			return
		for error in self.errors:
			print(f"{error}", file=sys.stderr, flush=True)

	def crash_with_errors(self) -> NoReturn:
		assert len(self.errors) != 0, "crash_with_errors should be called only with errors"
		self.print_errors()
		if len(self.errors) >= 256:
			raise ErrorExit(1)
		else:
			raise ErrorExit(len(self.errors))

	def critical_error(self, err:ET,loc:'Loc|None', msg:'str') -> NoReturn:
		error = Error(loc,err,msg)
		self.errors.append(error)
		raise CompileError(error)

	def exit_with_error(self, err:ET,loc:'Loc|None', msg:'str') -> NoReturn:
		self.errors.append(Error(loc,err,msg))
		self.crash_with_errors()

	def exit_properly(self, code:int = 0) -> NoReturn:
		self.show_errors()
		sys.exit(code)

@dataclass(slots=True, frozen=True)
class Config:
	file          : str
	output_file   : str
	module_name   : str
	entry         : str
	run_file      : bool
	verbose       : bool
	dump          : bool
	runtime       : bool
	errors        : ErrorBin
	@property
	def silent(self) ->bool:
		return self.errors.silent
	@classmethod
	def use_defaults(
		cls,
		errors        : ErrorBin,
		file          : str,
		*,
		output_file   : None|str       = None,
		module_name   : None|str       = None,
		entry         : None|str       = None,
		run_file      : None|bool      = None,
		verbose       : None|bool      = None,
		dump          : None|bool      = None,
		runtime       : None|bool      = None,
	) -> 'Config':
		if output_file   is None: output_file   = file[:file.rfind('.')] if '.' in os.path.basename(file) else file
		if module_name   is None: module_name   = module_name_from_file_path(file)
		if entry         is None: entry         = ENTRY_FUNCTION
		if run_file      is None: run_file      = False
		if verbose       is None: verbose       = False
		if dump          is None: dump          = False
		if runtime       is None: runtime       = False
		return cls(
			file,
			output_file,
			module_name,
			entry,
			run_file,
			verbose,
			dump,
			runtime,
			errors
		)

def process_cmd_args(eb:ErrorBin,args:list[str]) -> Config:
	assert len(args)>0, 'Error in the function above'
	self_name = args[0]
	file          = None
	output_file   = None
	entry         = None
	run_file      = None
	verbose       = None
	dump          = None
	runtime       = None
	args = args[1:]
	idx = 0
	while idx<len(args):
		arg = args[idx]
		if arg[:2] == '--':
			flag = arg[2:]
			if flag == 'help':
				usage(eb, self_name)
			elif flag == 'output':
				idx+=1
				if idx>=len(args):
					eb.exit_with_error(ET.CMD_OUTPUT_NAME,None,'expected file name after --output option (-h for help)')
				output_file = args[idx]
			elif flag == 'entry':
				idx+=1
				if idx>=len(args):
					eb.exit_with_error(ET.CMD_ENTRY_NAME,None,'expected function name after --entry option (-h for help)')
				entry = args[idx]
			elif flag == 'verbose':
				verbose = True
			elif flag == 'dump':
				dump = True
			elif flag == 'runtime':
				runtime = True
			elif flag == 'silent':
				eb = ErrorBin(True, eb.errors)
			else:
				eb.add_error(ET.CMD_FLAG,None,f"flag '--{flag}' is not supported yet")
		elif arg[:2] =='-o':
			idx+=1
			if idx>=len(args):
				eb.exit_with_error(ET.CMD_O_NAME,None,'expected file name after -o option (-h for help)')
			output_file = args[idx]
		elif arg[:1] == '-' and len(arg) > 1:
			for subflag in arg[1:]:
				if subflag == 'h':
					usage(eb, self_name)
				elif subflag == 'r':
					run_file = True
				elif subflag == 'v':
					verbose = True
				else:
					eb.add_error(ET.CMD_SUBFLAG,None,f"subflag '-{subflag}' is not supported yet")
		else:
			if file is not None:
				eb.add_error(ET.CMD_FILE,None,f"only one file can be compiled at a time, got '{file}' and '{arg}'")
			file = arg
		idx+=1
	if file is None:
		eb.exit_with_error(ET.CMD_FILE,None,'file was not provided')
	eb.show_errors()
	return Config.use_defaults(
		eb,
		file          = file,
		output_file   = output_file,
		entry         = entry,
		run_file      = run_file,
		verbose       = verbose,
		dump          = dump,
		runtime       = runtime,
	)
def usage(eb:ErrorBin,self_name:str|None) -> NoReturn:
	eb.show_errors()
	print(
f"""Usage:
	{self_name or '<program>'} file [flags]
Notes:
	short versions of flags can be combined for example `-r -v` can be shorten to `-rv`
Flags:
	-h --help      : print this message
	-o --output    : specify output file `-o name` (do not combine short version), '.vm' is appended
	-v --verbose   : generate debug output
	-r             : run compiled program in the built-in vm
	   --dump      : dump tokens of the program
	   --entry     : name of the entry function `--entry name`, default is '{ENTRY_FUNCTION}'
	   --runtime   : also write runtime support routines to `<output>.runtime.vm`
	   --silent    : do not print errors
"""
	)
	eb.exit_properly(0)
def extract_file_text_from_file_path(file_name:str) -> str:
	with open(file_name, encoding='utf-8') as file:
		text = file.read()
	return text
def module_name_from_file_path(file_path:str) -> str:
	name = os.path.basename(file_path)
	if '.' in name:
		name = name[:name.rfind('.')]
	return name
