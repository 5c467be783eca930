# apps/tasks/domain/services/task_service.py
import logging
from typing import Any, Iterable, List, Mapping, Optional

from apps.core.exceptions import NotFoundError, PersistenceError, UnauthorizedError
from apps.goals.domain.entities import GoalEntity
from apps.goals.ports.repositories import IGoalRepository
from apps.tasks.domain.entities import TaskEntity
from apps.tasks.ports.repositories import ITaskRepository

logger = logging.getLogger(__name__)


def calculate_progress(completed: int, total: int) -> int:
    """
    Procent ukończonych zadań zaokrąglony "do góry od połówki" (12.5 -> 13).
    Arytmetyka całkowita, żeby uniknąć bankierskiego round() i błędów floatów.
    """
    if total == 0:
        return 0
    return (200 * completed + total) // (2 * total)


def arrange_as_tree(tasks: Iterable[TaskEntity]) -> List[TaskEntity]:
    """
    Układa zadania celu jako drzewo: zadanie główne, zaraz po nim jego
    podzadania. `order` sortuje zadania główne między sobą, a podzadania
    w obrębie jednego rodzica. Podzadania bez rodzica w zbiorze idą na koniec.
    """
    def key(t):
        return (t.order is None, t.order or 0, t.id or 0)

    tasks = sorted(tasks, key=key)
    children = {}
    for t in tasks:
        if t.is_subtask:
            children.setdefault(t.parent_task_id, []).append(t)

    arranged = []
    for t in tasks:
        if t.is_main_task:
            arranged.append(t)
            arranged.extend(children.pop(t.id, []))
    for orphans in children.values():
        arranged.extend(orphans)
    return arranged


class TaskService:
    """
    Silnik agregacji cel/zadania:
    - utrzymuje Goal.progress zgodny ze stanem ukończenia zadań,
    - kaskaduje ukończenie z zadania głównego na jego podzadania,
    - kasuje podzadania razem z rodzicem.
    Autoryzację (czy cel należy do usera) robi wywołujący; tu sprawdzamy
    tylko zdenormalizowane Task.user_id.
    """

    def __init__(self, repository: ITaskRepository, goal_repository: IGoalRepository):
        self.repository = repository
        self.goal_repository = goal_repository

    def recompute_progress(self, goal_id: int) -> GoalEntity:
        """Przelicza postęp celu z aktualnego zbioru zadań (główne + podzadania)."""
        tasks = self.repository.get_by_goal(goal_id)
        total = len(tasks)
        completed = sum(1 for t in tasks if t.completed)

        progress = calculate_progress(completed, total)
        goal = self.goal_repository.update_progress(goal_id, progress)

        logger.debug("Goal %s progress: %s/%s -> %s%%", goal_id, completed, total, progress)
        return goal

    def toggle_task_completion(self, task_id: int, completed: bool, user_id: int) -> TaskEntity:
        """Zmienia stan ukończenia zadania, kaskaduje na podzadania i przelicza cel."""

        # 1. Pobierz zadanie i sprawdź właściciela
        task = self._get_owned_task(task_id, user_id)

        with self.repository.atomic():
            # 2. Zmień stan samego zadania
            task = self.repository.update(task.id, completed=completed)

            # 3. Kaskada tylko w dół i tylko przy ukończeniu zadania głównego.
            # Odznaczenie rodzica nie rusza podzadań, a podzadanie nie rusza rodzica.
            if task.is_main_task and completed:
                cascaded = 0
                for subtask in self.repository.get_subtasks(task.id):
                    if not subtask.completed:
                        self.repository.update(subtask.id, completed=True)
                        cascaded += 1
                if cascaded:
                    logger.info("Task %s completed: cascaded to %s subtask(s)", task.id, cascaded)

        # 4. Przelicz postęp celu (po zatwierdzeniu zmian)
        self.recompute_progress(task.goal_id)
        return task

    def delete_task(self, task_id: int, user_id: int) -> GoalEntity:
        """Usuwa zadanie (z podzadaniami, jeśli to zadanie główne) i przelicza cel."""
        task = self._get_owned_task(task_id, user_id)

        with self.repository.atomic():
            if task.is_main_task:
                # Błąd zapisu przerywa resztę partii (PersistenceError leci wyżej)
                for subtask in self.repository.get_subtasks(task.id):
                    self.repository.delete(subtask.id)
            self.repository.delete(task.id)

        return self.recompute_progress(task.goal_id)

    def create_tasks_from_breakdown(
            self,
            goal_id: int,
            user_id: int,
            breakdown: Iterable[Mapping[str, Any]]
        ) -> List[TaskEntity]:
        """
        Tworzy zadania z rozpisania AI w podanej kolejności: zadanie główne,
        zaraz po nim jego podzadania, potem następne zadanie główne.
        Wpisy bez tytułu są pomijane. Tworzenie jest "best-effort" per element
        (nic nie jest wycofywane). NIE przelicza postępu - robi to wywołujący
        raz po całej partii.
        """
        created: List[TaskEntity] = []
        order = self.repository.next_order(goal_id)

        for index, entry in enumerate(breakdown or []):
            title = self._clean_title(entry.get('title') if isinstance(entry, Mapping) else None)
            if not title:
                logger.warning("Goal %s: skipping malformed breakdown entry #%s", goal_id, index)
                continue

            try:
                main_task = self.repository.create(TaskEntity(
                    id=None,
                    goal_id=goal_id,
                    user_id=user_id,
                    title=title,
                    is_ai_generated=True,
                    is_subtask=False,
                    order=order,
                ))
            except PersistenceError as e:
                logger.error("Goal %s: failed to create task '%s': %s", goal_id, title, e.message)
                continue

            created.append(main_task)
            order += 1

            subtasks = entry.get('subtasks') or []
            if not isinstance(subtasks, (list, tuple)):
                logger.warning("Goal %s: ignoring malformed subtask list of '%s'", goal_id, title)
                subtasks = []

            for sub_index, sub in enumerate(subtasks):
                sub_title, minutes = self._parse_subtask(sub)
                if not sub_title:
                    logger.warning(
                        "Goal %s: skipping malformed subtask #%s of '%s'", goal_id, sub_index, title
                    )
                    continue
                try:
                    subtask = self.repository.create(TaskEntity(
                        id=None,
                        goal_id=goal_id,
                        user_id=user_id,
                        title=sub_title,
                        estimated_minutes=minutes,
                        is_ai_generated=True,
                        is_subtask=True,
                        parent_task_id=main_task.id,
                        order=order,
                    ))
                except PersistenceError as e:
                    logger.error("Goal %s: failed to create subtask '%s': %s", goal_id, sub_title, e.message)
                    continue
                created.append(subtask)
                order += 1

        logger.info("Goal %s: created %s task(s) from breakdown", goal_id, len(created))
        return created

    def _get_owned_task(self, task_id: int, user_id: int) -> TaskEntity:
        task = self.repository.get_by_id(task_id)
        if not task:
            raise NotFoundError("Task not found")
        if not task.is_owned_by(user_id):
            raise UnauthorizedError("Task does not belong to the current user")
        return task

    @staticmethod
    def _clean_title(value) -> Optional[str]:
        if not isinstance(value, str):
            return None
        return value.strip() or None

    @classmethod
    def _parse_subtask(cls, sub):
        # Podzadanie jako słownik {title, estimatedMinutes} albo sam tekst
        if isinstance(sub, str):
            return cls._clean_title(sub), None
        if not isinstance(sub, Mapping):
            return None, None

        minutes = sub.get('estimatedMinutes', sub.get('estimated_minutes'))
        try:
            minutes = int(minutes) if minutes is not None else None
        except (TypeError, ValueError, OverflowError):
            minutes = None
        if minutes is not None and minutes <= 0:
            minutes = None
        return cls._clean_title(sub.get('title')), minutes
