from .core import ET, Error, ErrorBin, ErrorExit, CompileError, NEWLINE, Loc, Config, process_cmd_args, extract_file_text_from_file_path, module_name_from_file_path, DIGITS, KEYWORDS, ENTRY_FUNCTION, MULT_ROUTINE, PRINT_ROUTINE
from .token import TT, Token, SYMBOLS
from .labels import LabelAllocator
from .run import VM, VMError, Instruction, parse_vm, run_program
from .dump import dump_tokens
__all__ = [
	#constants
	"DIGITS",
	"ENTRY_FUNCTION",
	"KEYWORDS",
	"MULT_ROUTINE",
	"NEWLINE",
	"PRINT_ROUTINE",
	"SYMBOLS",
	#classes
	"TT",
	"Token",
	"Loc",
	"Config",
	"ET",
	"Error",
	"ErrorBin",
	"ErrorExit",
	"CompileError",
	"LabelAllocator",
	"VM",
	"VMError",
	"Instruction",
	#functions
	"dump_tokens",
	"parse_vm",
	"run_program",
	"process_cmd_args",
	"extract_file_text_from_file_path",
	"module_name_from_file_path",
]
