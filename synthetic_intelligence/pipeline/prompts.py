"""Prompt templates for every oracle request issued by the pipeline.

The decomposition template names the exact fields (``id``, ``description``,
``dependencies``, ``estimated_duration``) the decomposer parses; keep them in
sync with :class:`~synthetic_intelligence.schemas.models.Subtask`.
"""

from langchain_core.prompts import ChatPromptTemplate


TRAINING_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            """You are an AI agent specialized in {agent_type}.
Your capabilities include: {capabilities}

Training Data: {training_data}

Learn from this information and be ready to perform tasks related to your
specialization.""",
        ),
        (
            "human",
            "Acknowledge your training and confirm you're ready to perform tasks.",
        ),
    ]
)


CLASSIFICATION_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "You are a task complexity analyzer."),
        (
            "human",
            """Analyze the complexity of this task and classify it as 'low',
'medium', or 'high':

TASK: {task_description}

Consider:
- Number of steps required
- Domain knowledge needed
- Potential challenges
- Time estimation

Respond with only one word: low, medium, or high.""",
        ),
    ]
)


DECOMPOSITION_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "You are an expert at breaking down complex tasks into manageable "
            "subtasks.",
        ),
        (
            "human",
            """Break down the following complex task into smaller, manageable subtasks:

TASK: {task_description}

Return the subtasks as a JSON array of objects, each with:
- id: unique identifier
- description: clear description of the subtask
- dependencies: list of ids of subtasks that must be completed first
- estimated_duration: time estimate in minutes

Format the response as valid JSON only.""",
        ),
    ]
)


EXECUTION_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            """You are {agent_name}.
Background knowledge: {knowledge}
Memory: {memory}""",
        ),
        (
            "human",
            """You are {agent_name}, an AI agent specialized in {agent_type}.
Your capabilities: {capabilities}

Current subtask: {subtask_description}
Context: {context}

Previous knowledge from your memory may be relevant.

Execute this subtask and provide the result.""",
        ),
    ]
)


SYNTHESIS_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "You are an expert at synthesizing multiple task results into a "
            "cohesive solution.",
        ),
        (
            "human",
            """Synthesize the following results from subtasks into a complete solution for the original task.

ORIGINAL TASK: {task_description}

SUBTASK RESULTS:
{results}

Provide a comprehensive, well-structured final result that addresses the
original task completely.""",
        ),
    ]
)


COLLABORATIVE_SYNTHESIS_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "You are an expert at integrating the contributions of several "
            "specialist agents into one coherent solution.",
        ),
        (
            "human",
            """Several specialist agents each completed part of the original task.
Combine their contributions into a single answer.

ORIGINAL TASK: {task_description}

CONTRIBUTIONS:
{contributions}

Reconcile overlapping or conflicting contributions and provide one coherent,
well-structured final result that addresses the original task completely.""",
        ),
    ]
)
