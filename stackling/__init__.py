__all__ = (
	"Config",
	"Lexer",
	"Parser",
	"VMWriter",
	"LabelAllocator",
	"SymbolTable",
	"Scopes",
	"ErrorBin",
	"ErrorExit",
	"CompileError",
	"Loc",
	"compile_string",
	"compile_text",
	"run_program",
	"runtime_support",
)
from .compiler.lexer import Lexer
from .compiler.parser import Parser
from .compiler.vm_writer import VMWriter
from .compiler.symbol_table import SymbolTable, Scopes
from .compiler.runtime import runtime_support
from .compiler.utils import compile_string, compile_text
from .compiler.primitives import Config, ErrorBin, ErrorExit, CompileError, Loc, LabelAllocator, run_program
from . import compiler
