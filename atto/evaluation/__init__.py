from atto.evaluation.evaluator import Evaluator, evaluate
