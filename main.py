import sys

from rich.pretty import pprint

from argtable import *

opts = " ".join((
    "-1:f (one)",
    "-2:f (two)",
    "-3:f (three)",
    "-f:fr=1",
    "-i:ir=1",
    "-I:Ir=3",
    "-r:rr=4.5",
    "-R:Rr=8.3",
    "-s:sr=Fred",
    "-S:Sr=Bill",
    "-c:c[a,b,c]r",
    "-C:C[d,e,f]r",
))


if __name__ == '__main__':
    table = ArgumentTable(opts, shell=False)
    table.usage()

    tokens = list(sys.argv)
    try:
        table.parse(tokens)
    except ArgumentsExit as exit:
        trigger(exit, shell=True)

    for argument in table:
        pprint({argument.name: table.get(argument.name, argument.kind)})

    for token in tokens[1:]:
        print(token)
