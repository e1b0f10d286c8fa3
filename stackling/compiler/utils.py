import os
from .primitives import Config, ErrorBin, extract_file_text_from_file_path, dump_tokens, ET, run_program
from .lexer import Lexer, lex
from .parser import Parser
from .vm_writer import VMWriter
from .runtime import runtime_support
__all__ = [
	"compile_text",
	"compile_file",
	"compile_string",
	"run_compiled",
	"write_outputs",
]
def compile_text(text:str, config:Config, file_path:str|None = None) -> VMWriter:
	file_path = config.file if file_path is None else file_path
	if config.dump:
		dump_tokens(lex(text, config, file_path), config)
	return Parser(Lexer(text, config, file_path), config).parse()

def compile_file(config:Config) -> VMWriter:
	if not os.path.exists(config.file):
		config.errors.critical_error(ET.FILE, None, f"file '{config.file}' was not found")
	if config.verbose:
		print(f"INFO: Compiling file '{config.file}' as module '{config.module_name}'")
	try:
		text = extract_file_text_from_file_path(config.file)
	except UnicodeDecodeError as e:
		config.errors.critical_error(ET.FILE, None, f"file '{config.file}' is not valid utf-8: {e.reason} at byte {e.start}")
	except OSError as e:
		config.errors.critical_error(ET.FILE, None, f"file '{config.file}' can not be read: {e.strerror}")
	writer = compile_text(text, config)
	if config.verbose:
		print(f"INFO: Generated {len(writer.lines)} instructions")
	return writer

def compile_string(text:str, module_name:str = 'Main', entry:str|None = None) -> str:
	"""compile source text without touching the disk, return the VM text"""
	config = Config.use_defaults(ErrorBin(silent=True), f"{module_name}.txt", entry=entry)
	return compile_text(text, config).text

def write_outputs(writer:VMWriter, config:Config) -> list[str]:
	written = [f"{config.output_file}.vm"]
	if config.runtime:
		written.append(f"{config.output_file}.runtime.vm")
	try:
		writer.write(written[0])
		if config.runtime:
			with open(written[1], 'w', encoding='utf-8') as file:
				file.write(runtime_support(config.module_name))
	except OSError as e:
		config.errors.critical_error(ET.FILE, None, f"can not write '{e.filename}': {e.strerror}")
	if config.verbose:
		for file_path in written:
			print(f"INFO: Wrote '{file_path}'")
	return written

def run_compiled(text:str, config:Config, *, echo:bool = False) -> list[int]:
	entry = f"{config.module_name}.{config.entry}"
	if config.verbose:
		print(f"INFO: Running '{entry}'")
	return run_program(text, entry, (runtime_support(config.module_name),), echo=echo)
