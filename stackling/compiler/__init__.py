from sys import argv
from typing import NoReturn

from .primitives import process_cmd_args, ErrorBin, CompileError, VMError, ET
from .utils import compile_file, write_outputs, run_compiled

def main(args:'list[str]|None' = None) -> NoReturn:
	eb = ErrorBin()
	config = process_cmd_args(eb, argv if args is None else args)
	try:
		writer = compile_file(config)
		write_outputs(writer, config)
	except CompileError:
		# the error is already in the bin
		config.errors.show_errors()
		raise
	if config.run_file:
		try:
			run_compiled(writer.text, config, echo=True)
		except VMError as e:
			config.errors.add_error(ET.RUN, None, f"{e}")
	config.errors.exit_properly(0)
if __name__ == '__main__':
	main()
