from .token import Token
from .core import Config

def dump_tokens(tokens:'list[Token]', config:Config) -> None:
	if not config.dump:
		return
	print("TOKENS:" )
	for token in tokens:
		print(f"{token.loc}: \t{token.typ.name.lower()} \t{token}" )
	config.errors.exit_properly(0)
