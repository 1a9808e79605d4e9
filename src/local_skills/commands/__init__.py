"""Operations on a project's skills."""

from local_skills.commands.add import add
from local_skills.commands.context import ProjectContext
from local_skills.commands.info import info
from local_skills.commands.ls import ls
from local_skills.commands.remove import remove
from local_skills.commands.update import update

__all__ = ["ProjectContext", "add", "info", "ls", "remove", "update"]
