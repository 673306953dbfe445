from rich import print
from rich.pretty import pprint

from arglet import *


if __name__ == '__main__':
    args = Arguments()
    pprint(args)
    print(args)
