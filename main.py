import logging

from sextant import *


def show(context):
    output([{"id": context.binding("id"), "verbose": context.option("verbose", False)}], context)


def tag(context):
    output(context.binding("others"), context)


program = Program("demo", "0.1.0", [
    Collection("user", [
        Leaf("show", ["id"], show, [
            Option("verbose", "V", "verbose", help="Print more."),
            Option("output", "o", "output", default="pretty", help="Output format, 'table' or 'pretty'."),
        ]),
        Leaf("tag", [...], tag),
    ]),
], config_file="demo.yaml")


if __name__ == '__main__':
    configure_logging(logging.DEBUG)
    start(program)
