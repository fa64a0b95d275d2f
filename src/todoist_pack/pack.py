"""
Todoist pack definition.

Registers the network domain, authentication, formulas, column formats and
sync tables on a single Pack instance.
"""

from __future__ import annotations

from todoist_pack import formulas, sync_tables
from todoist_pack.auth import AUTHENTICATION
from todoist_pack.constants import (
    NETWORK_DOMAIN,
    PROJECT_URL_PATTERNS,
    SCOPE_READ_WRITE,
    TASK_URL_PATTERNS,
)
from todoist_pack.models.schema import ActivityLogEvent, Label, Project, SharedLabel, Task
from todoist_pack.sdk import (
    ColumnFormat,
    Formula,
    Pack,
    Parameter,
    ParameterType,
    ResultType,
    SyncTable,
)


def build_pack() -> Pack:
    pack = Pack()
    pack.add_network_domain(NETWORK_DOMAIN)
    pack.set_user_authentication(AUTHENTICATION)

    # =========================================================================
    # Formulas
    # =========================================================================

    pack.add_formula(Formula(
        name="GetProject",
        description="Gets a Todoist project by URL",
        parameters=[
            Parameter("url", ParameterType.STRING, "The URL of the project"),
        ],
        schema=Project,
        execute=formulas.get_project,
    ))

    pack.add_formula(Formula(
        name="GetTask",
        description="Gets a Todoist task by URL",
        parameters=[
            Parameter("url", ParameterType.STRING, "The URL of the task"),
        ],
        schema=Task,
        execute=formulas.get_task,
    ))

    # =========================================================================
    # Column Formats
    # =========================================================================

    pack.add_column_format(ColumnFormat(
        name="Project",
        formula_name="GetProject",
        matchers=list(PROJECT_URL_PATTERNS),
    ))

    pack.add_column_format(ColumnFormat(
        name="Task",
        formula_name="GetTask",
        matchers=list(TASK_URL_PATTERNS),
    ))

    # =========================================================================
    # Action Formulas
    # =========================================================================

    pack.add_formula(Formula(
        name="AddProject",
        description="Add a new Todoist project",
        parameters=[
            Parameter("name", ParameterType.STRING, "The name of the new project"),
            Parameter(
                "collaborators",
                ParameterType.STRING,
                "Comma-delimited list of collaborator emails",
                optional=True,
            ),
        ],
        result_type=ResultType.STRING,
        is_action=True,
        extra_oauth_scopes=[SCOPE_READ_WRITE],
        execute=formulas.add_project,
    ))

    pack.add_formula(Formula(
        name="AddTask",
        description="Add a new task.",
        parameters=[
            Parameter("name", ParameterType.STRING, "The name of the task."),
            Parameter(
                "projectId",
                ParameterType.NUMBER,
                "The ID of the project to add it to. If blank, it will be added to the user's Inbox.",
                optional=True,
            ),
        ],
        result_type=ResultType.STRING,
        is_action=True,
        extra_oauth_scopes=[SCOPE_READ_WRITE],
        execute=formulas.add_task,
    ))

    pack.add_formula(Formula(
        name="UpdateTask",
        description="Updates the name of a task.",
        parameters=[
            Parameter("taskId", ParameterType.STRING, "The ID of the task to update."),
            Parameter("name", ParameterType.STRING, "The new name of the task."),
        ],
        schema=Task,
        is_action=True,
        extra_oauth_scopes=[SCOPE_READ_WRITE],
        execute=formulas.update_task,
    ))

    pack.add_formula(Formula(
        name="MarkAsComplete",
        description="Mark a task as completed.",
        parameters=[
            Parameter("taskId", ParameterType.STRING, "The ID of the task to be marked as complete."),
        ],
        result_type=ResultType.STRING,
        is_action=True,
        extra_oauth_scopes=[SCOPE_READ_WRITE],
        execute=formulas.mark_as_complete,
    ))

    # =========================================================================
    # Sync Tables
    # =========================================================================

    pack.add_sync_table(SyncTable(
        name="ActivityLog",
        schema=ActivityLogEvent,
        formula=Formula(
            name="SyncActivityLog",
            description="Sync Activity Log",
            execute=sync_tables.sync_activity_log,
        ),
    ))

    pack.add_sync_table(SyncTable(
        name="SharedLabels",
        schema=SharedLabel,
        formula=Formula(
            name="SharedLabels",
            description="Sync shared labels",
            execute=sync_tables.sync_shared_labels,
        ),
    ))

    pack.add_sync_table(SyncTable(
        name="Labels",
        schema=Label,
        formula=Formula(
            name="SyncLabels",
            description="Sync labels",
            execute=sync_tables.sync_labels,
        ),
    ))

    pack.add_sync_table(SyncTable(
        name="Projects",
        schema=Project,
        formula=Formula(
            name="SyncProjects",
            description="Sync projects",
            execute=sync_tables.sync_projects,
        ),
    ))

    pack.add_sync_table(SyncTable(
        name="Tasks",
        schema=Task,
        formula=Formula(
            name="SyncTasks",
            description="Sync tasks",
            parameters=[
                Parameter(
                    "filter",
                    ParameterType.STRING,
                    "A supported filter string. See the Todoist help center.",
                    optional=True,
                ),
                Parameter(
                    "project",
                    ParameterType.STRING,
                    "Limit tasks to a specific project.",
                    optional=True,
                    autocomplete=sync_tables.autocomplete_projects,
                ),
            ],
            execute=sync_tables.sync_tasks,
        ),
    ))

    return pack


pack = build_pack()
