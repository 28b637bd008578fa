"""Interactive menu loop for the task list.

The menu never touches storage details: it is handed one TaskStore and only
calls add_task / get_tasks / mark_completed. Numbers shown to the user are
1-based; the store is addressed 0-based.
"""
import logging
from typing import List, Optional

from storage import TaskStore, InvalidDescriptionError
from theme import color, color_entry, HEADER_COLOR, NUMBER_COLOR

logger = logging.getLogger(__name__)

MENU = (
    "1. View tasks\n"
    "2. Add task\n"
    "3. Mark task as completed\n"
    "4. Exit"
)


class CLI:
    def __init__(self, store: TaskStore):
        self.store: TaskStore = store

    def run(self) -> None:
        """Main REPL loop; returns on option 4, 'exit', EOF or Ctrl-C."""
        try:
            while True:
                print("\n" + color("Task Manager", HEADER_COLOR))
                print(MENU)
                choice = input("Choose an option: ").strip()
                if choice in ('4', 'exit'):
                    print("Exiting...")
                    return
                self._handle_choice(choice)
        except (KeyboardInterrupt, EOFError):
            print("\nInterrupted. Goodbye.")

    # -------------------- dispatch --------------------
    def _handle_choice(self, choice: str) -> None:
        if choice == '1':
            self._view()
        elif choice == '2':
            self._add()
        elif choice == '3':
            self._complete()
        else:
            print("Invalid choice. Please try again.")

    # -------------------- user-interactive flows --------------------
    def _view(self) -> None:
        tasks = self.store.get_tasks()
        if not tasks:
            print("No tasks available.")
        else:
            self._print_tasks(tasks)
        self._storage_failed()

    def _add(self) -> None:
        description = input("Enter a new task: ")
        if not description.strip():
            print("Task description required.")
            return
        try:
            self.store.add_task(description)
        except InvalidDescriptionError as e:
            print(e)
            return
        if self._storage_failed():
            return
        print("Task added successfully.")

    def _complete(self) -> None:
        tasks = self.store.get_tasks()
        if self._storage_failed():
            return
        if not tasks:
            print("No tasks available to mark as completed.")
            return
        self._print_tasks(tasks)
        number = _parse_number(input("Enter the task number to mark as completed: "))
        if number is None:
            print("Invalid task number.")
            return
        done = self.store.mark_completed(number - 1)
        if self._storage_failed():
            return
        if not done:
            print("Invalid task number.")
            return
        print("Task marked as completed.")

    def _print_tasks(self, tasks: List[str]) -> None:
        print("\n" + color("Tasks:", HEADER_COLOR))
        for n, entry in enumerate(tasks, start=1):
            print(f"{color(f'{n}.', NUMBER_COLOR)} {color_entry(entry)}")

    def _storage_failed(self) -> bool:
        """Print and report the error left by the store call just made, if any."""
        # only the file backend records failures
        err = getattr(self.store, 'last_error', None)
        if err:
            print(f"Storage error: {err}")
        return bool(err)


def _parse_number(raw: str) -> Optional[int]:
    raw = raw.strip().rstrip('.')
    try:
        return int(raw)
    except ValueError:
        logger.debug("Rejected task number %r", raw)
        return None
