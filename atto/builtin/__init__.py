from atto.builtin.env_builtin import default_environment, register
