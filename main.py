from rich.pretty import pprint

from treeline import *


def move(input, output):
    direction = input >> Direction
    steps = input.read(Unsigned)
    output.print("moving %s by %d" % (converter(Direction).text(direction), steps))
    return direction, steps


if __name__ == '__main__':
    pprint(Input.parse("move right 3"))
    pprint(invoke(move, "move right 3", shell=True, fancy=True, colorful=True))
