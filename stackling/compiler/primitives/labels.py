import itertools
__all__ = [
	'LabelAllocator',
]
class LabelAllocator:
	"""Hands out 'label0', 'label1', ... for one compilation run"""
	__slots__ = ('prefix', 'counter')
	def __init__(self, prefix:str = 'label') -> None:
		self.prefix  :str                  = prefix
		self.counter :itertools.count[int] = itertools.count()
	def new_label(self) -> str:
		return f"{self.prefix}{next(self.counter)}"
