from rich.pretty import pprint

from funcli import *


def callback(
        file,
        /,
        args=None,
        options=Options("output", debug=False),
):
    pprint(dict(file=file, args=args, options=options))


if __name__ == '__main__':
    pprint(Schema.from_callable(callback))
    invoke(callback)
