"""
Assistant Reply Templates

Canned replies for the assistant chat, picked by keywords in the message.
"""

HELP_REPLY = (
    "I'm here to help you with your development task. Using {model}, I can assist with "
    "code generation, debugging, refactoring, and answering technical questions."
)
HELP_CONTEXT = " I can see you've provided {count} context file(s) for reference."

CREATE_REPLY = (
    "I'll help you create the code you need. Using {model}, I can generate components, "
    "functions, and complete features."
)
CREATE_CONTEXT = (
    " Based on your project files, I'll ensure the generated code follows your existing "
    "patterns and style."
)

DEBUG_REPLY = (
    "I'll help you debug the issue. Using {model}, I can analyze error messages, review "
    "code logic, and suggest fixes."
)
DEBUG_CONTEXT = " I'll examine your provided files to understand the context of the problem."

ECHO_REPLY = 'I understand your request: "{message}". Using {model}, I\'ll provide the best assistance possible.'
ECHO_CONTEXT = " I'll reference your {count} context file(s) to give you relevant, project-specific guidance."
ECHO_NO_CONTEXT = " For more specific help, you can share relevant project files as context."

# (keywords, reply, suffix when context files are attached), checked in order
KEYWORD_REPLIES = [
    (("help", "assist"), HELP_REPLY, HELP_CONTEXT),
    (("create", "generate"), CREATE_REPLY, CREATE_CONTEXT),
    (("debug", "error"), DEBUG_REPLY, DEBUG_CONTEXT),
]
