import sys

from django.core.management.base import BaseCommand

from lambda_nfa.shell import PROMPT, NFAShell


class Command(BaseCommand):
    help = 'Interactive shell for building and querying a lambda NFA'

    # Lets tests feed commands through call_command(..., stdin=...)
    stealth_options = ('stdin',)

    def add_arguments(self, parser):
        parser.add_argument(
            '--no-prompt',
            action='store_true',
            help='Do not print the prompt before reading each command',
        )

    def handle(self, *args, **options):
        stdin = options.get('stdin') or sys.stdin
        shell = NFAShell(self.stdout, self.stderr)

        while True:
            if not options['no_prompt']:
                self.stdout.write(PROMPT, ending='')
                self.stdout.flush()

            line = stdin.readline()
            if not line:
                break
            if not shell.execute(line):
                break
