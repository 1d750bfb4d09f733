import argparse
import copy
import json
import logging
import os
import pathlib
import sys
import threading
from concurrent.futures import Future
from pathlib import Path
from typing import Callable

from remindbridge import helpers
from remindbridge.channel import MethodChannel
from remindbridge.reminders.controller import ReminderController
from remindbridge.reminders.model.memorystore import MemoryStore
from remindbridge.reminders.model.store import ReminderStore


class RemindBridgeCli:
    """
    Defines the functionality of the RemindBridge CLI.
    """

    SETTINGS = {
        'store': helpers.STORE,
        'workers': helpers.WORKERS,
        'default_list': helpers.DEFAULT_LIST_TITLE,
        'log_level': helpers.LOG_LEVEL,
    }

    #: Commands which need access to reminders before they run.
    NEEDS_ACCESS = ['lists', 'reminders', 'save', 'new-list', 'delete']

    def __init__(self, args, out=None, inp=None):
        """
        Sets up logging and settings, and creates the controller for the configured store.

        :param args: the parsed command-line arguments.
        :param out: where results are written. Defaults to standard output.
        :param inp: where ``serve`` reads requests from. Defaults to standard input.
        """
        self.args = args
        self.out = out if out is not None else sys.stdout
        self.inp = inp if inp is not None else sys.stdin
        self.settings = copy.deepcopy(RemindBridgeCli.SETTINGS)
        self.logger = self.setup_logging()
        self.apply_settings()
        self.controller = ReminderController(self.create_store(), self.settings['workers'])

    def run(self) -> int:
        """
        Runs the requested command.

        :return: the exit code.
        """
        commands = {
            'permission': self.permission,
            'default-list': self.default_list,
            'lists': self.lists,
            'reminders': self.reminders,
            'save': self.save,
            'new-list': self.new_list,
            'delete': self.delete,
            'serve': self.serve,
        }
        try:
            if self.args.command in RemindBridgeCli.NEEDS_ACCESS and not self.preflight():
                return 3
            return commands[self.args.command]()
        finally:
            self.controller.shutdown()

    def emit(self, text: str) -> None:
        print(text, file=self.out)
        self.out.flush()

    def __process_return(self, cb: Callable, error: str) -> int:
        """
        Process the return value of one of the controller methods. On success the data is written out, otherwise the
        error is logged.

        :param cb: the controller function to run. It may return a result tuple or a future resolving to one.
        :param error: the error message to log on failure.
        :return: the exit code.
        """
        result = cb()
        success, data = result.result() if isinstance(result, Future) else result
        if not success:
            logging.critical('{0}: {1}'.format(error, data))
            return 4
        self.emit(data)
        return 0

    def preflight(self) -> bool:
        """
        Request access to reminders.

        :return: True if access is granted.
        """
        if not self.controller.request_permission().result():
            logging.critical('Access to reminders was denied. Grant access in System Settings > Privacy & Security > '
                             'Reminders.')
            return False
        return True

    def permission(self) -> int:
        granted = self.controller.request_permission().result()
        self.emit(json.dumps({'granted': granted}))
        return 0 if granted else 3

    def default_list(self) -> int:
        default_list = self.controller.get_default_list()
        self.emit(default_list if default_list is not None else 'null')
        return 0

    def lists(self) -> int:
        return self.__process_return(self.controller.get_all_lists, 'Error fetching reminder lists')

    def reminders(self) -> int:
        return self.__process_return(lambda: self.controller.get_reminders(self.args.list),
                                     'Error fetching reminders')

    def save(self) -> int:
        fields = self.inp.read() if self.args.json == '-' else self.args.json
        return self.__process_return(lambda: self.controller.save_reminder(fields), 'Error saving reminder')

    def new_list(self) -> int:
        return self.__process_return(lambda: self.controller.save_reminder_list(self.args.title),
                                     'Error creating reminder list')

    def delete(self) -> int:
        return self.__process_return(lambda: self.controller.delete_reminder(self.args.id), 'Error deleting reminder')

    def serve(self) -> int:
        """
        Reads one JSON request per line and writes one JSON response per line until the input is closed.
        """
        channel = MethodChannel(self.controller)
        write_lock = threading.Lock()

        def write(text: str) -> None:
            with write_lock:
                self.emit(text)

        handler = None
        if self.args.forward_logs:
            handler = helpers.FunctionHandler(lambda msg: write(json.dumps({'event': 'log', 'message': msg})))
            handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
            logging.getLogger().addHandler(handler)

        logging.info('Serving reminder requests on standard input')
        try:
            for line in self.inp:
                if line.strip() == '':
                    continue
                write(channel.handle_json(line))
        finally:
            if handler is not None:
                logging.getLogger().removeHandler(handler)
        logging.info('Input closed, stopping')
        return 0

    def create_store(self) -> ReminderStore:
        """
        Creates the store selected in the settings.

        :return: the reminders store.
        """
        if self.settings['store'] == 'memory':
            return MemoryStore(default_list_title=self.settings['default_list'])
        if self.settings['store'] == 'eventkit':
            from remindbridge.reminders.model.eventkitstore import EventKitStore
            return EventKitStore()
        logging.critical('Unknown store {}. Use "eventkit" or "memory".'.format(self.settings['store']))
        sys.exit(2)

    def apply_settings(self) -> None:
        """
        Load settings from the configuration file, This is normally in
        ~/Library/Application Support/RemindBridge/conf.json, but may be overridden with the --config option. Any
        configuration options specified via command-line options will override the values in the configuration file.
        """

        if 'config' in self.args:
            if os.path.exists(self.args.config):
                conf_file = self.args.config
                self.logger.info('Using custom config file: {}'.format(conf_file))
            else:
                self.logger.critical('Configuration file {} not found.'.format(self.args.config))
                sys.exit(2)
        else:
            conf_file = helpers.settings_folder() / 'conf.json'
            self.logger.debug('Using default config file: {}'.format(conf_file))

        self.merge_settings(conf_file)
        self.override_config()
        self.validate_settings()
        self.logger.setLevel(helpers.LOG_LEVELS[self.settings['log_level']])

        logging.debug("Settings in use: {}".format(json.dumps(self.settings, indent=2)))

    def validate_settings(self) -> None:
        """
        Check the merged settings, exiting with status 20 if any value cannot be used.
        """

        errors = []
        if self.settings['log_level'] not in helpers.LOG_LEVELS:
            errors.append('log_level must be one of {0}, not {1!r}'.format(list(helpers.LOG_LEVELS.keys()),
                                                                           self.settings['log_level']))
        workers = self.settings['workers']
        if not helpers.is_int(workers) or workers < 1:
            errors.append('workers must be a positive integer, not {!r}'.format(workers))
        if not isinstance(self.settings['default_list'], str):
            errors.append('default_list must be a string, not {!r}'.format(self.settings['default_list']))
        for error in errors:
            logging.critical('Invalid setting: {}'.format(error))
        if errors:
            sys.exit(20)

    def merge_settings(self, conf_file) -> None:
        """
        Override any of the default settings with settings found in a configuration file.
        """

        if os.path.exists(conf_file):
            with open(conf_file) as fp:
                try:
                    loaded_settings = json.loads(fp.read())
                except json.decoder.JSONDecodeError:
                    logging.critical("Your configuration file at {} is invalid. Please check syntax.".format(conf_file))
                    sys.exit(20)
            if not isinstance(loaded_settings, dict):
                logging.critical("Your configuration file at {} must contain a JSON object.".format(conf_file))
                sys.exit(20)
            for key in self.settings.keys():
                if key in loaded_settings:
                    self.settings[key] = loaded_settings[key]

    def override_config(self) -> None:
        """
        Override any settings (default or from configuration file) which have been specified as command-line options.
        """

        vargs = vars(self.args)
        for key in self.settings.keys():
            if key in vargs:
                self.settings[key] = vargs[key]

    def setup_logging(self) -> logging.Logger:
        """
        Sets up the logging system.

        :return: the logging helper for the CLI.
        """

        if 'log_dir' in self.args:
            if os.access(self.args.log_dir, os.W_OK | os.X_OK):
                log_folder = Path(self.args.log_dir)
            else:
                print("Specified log directory {} is not accessible.".format(self.args.log_dir), file=sys.stderr)
                sys.exit(1)
        else:
            log_folder = None

        log_level = self.args.log_level if 'log_level' in self.args else helpers.LOG_LEVEL
        return helpers.setup_logging(log_level, log_folder)


def parser() -> argparse.ArgumentParser:
    """
    Defines arguments accepted by the CLI.
    """

    arg_parser = argparse.ArgumentParser(
        prog="remindbridge",
        description="Read and write your Apple Reminders as JSON.",
    )

    arg_parser.add_argument(
        "--store",
        type=str,
        choices=['eventkit', 'memory'],
        default=argparse.SUPPRESS,
        help="the reminders store to use.")
    arg_parser.add_argument(
        "--workers",
        type=int,
        default=argparse.SUPPRESS,
        help="number of threads used for saves and deletions.")
    arg_parser.add_argument(
        "--default-list",
        dest="default_list",
        type=str,
        default=argparse.SUPPRESS,
        help="title of the default list of the memory store.")
    arg_parser.add_argument(
        "--config",
        type=pathlib.Path,
        default=argparse.SUPPRESS,
        help="use to provide a path to a custom configuration file.")
    arg_parser.add_argument(
        "--log-dir",
        type=pathlib.Path,
        default=argparse.SUPPRESS,
        help="specify a custom directory to use for logging.")
    arg_parser.add_argument(
        "--log-level",
        type=str,
        choices=list(helpers.LOG_LEVELS.keys()),
        default=argparse.SUPPRESS,
        help="specify the logging level.")

    commands = arg_parser.add_subparsers(dest="command", required=True)
    commands.add_parser("permission", help="request access to reminders.")
    commands.add_parser("default-list", help="show the default list for new reminders.")
    commands.add_parser("lists", help="show all reminder lists.")
    reminders = commands.add_parser("reminders", help="show reminders.")
    reminders.add_argument("--list", type=str, default=None, help="only show reminders in the list with this ID.")
    save = commands.add_parser("save", help="create or update a reminder.")
    save.add_argument("json", type=str, help="the reminder as a JSON object, or - to read it from standard input.")
    new_list = commands.add_parser("new-list", help="create a reminder list.")
    new_list.add_argument("title", type=str, help="the title of the new list.")
    delete = commands.add_parser("delete", help="delete a reminder.")
    delete.add_argument("id", type=str, help="the ID of the reminder to delete.")
    serve = commands.add_parser("serve", help="answer JSON requests on standard input, one per line.")
    serve.add_argument("--forward-logs", action='store_true', help="also write log messages to standard output.")
    return arg_parser


def main(argv=None):
    sys.exit(RemindBridgeCli(parser().parse_args(argv)).run())


if __name__ == "__main__":
    main()
