import math
from abc import ABC, abstractmethod
from typing import NamedTuple


# Erros dos conjuntos de pontos
class SpatialIndexError(Exception):
    pass


# Conjunto construído a partir de uma coleção vazia
class InvalidArgumentError(SpatialIndexError, ValueError):
    pass


# Consulta feita em um conjunto sem pontos
class EmptyStructureError(SpatialIndexError, LookupError):
    pass


class Point(NamedTuple):
    # Par imutável (x, y); igualdade é igualdade exata das coordenadas
    x: float
    y: float

    @classmethod
    def of(cls, value):
        # Aceita um Point ou qualquer par (x, y)
        if isinstance(value, cls):
            return value
        x, y = value
        return cls(float(x), float(y))

    @staticmethod
    def squared_distance(a, b):
        dx = a.x - b.x
        dy = a.y - b.y
        return dx * dx + dy * dy

    @staticmethod
    def distance(a, b):
        return math.sqrt(Point.squared_distance(a, b))


# Conjunto de pontos no plano que responde qual ponto armazenado é o mais próximo
class PointSet(ABC):

    @abstractmethod
    def nearest(self, x, y) -> Point:
        raise NotImplementedError


# Busca linear em todos os pontos; serve de referência para conferir a KD-Tree
# Entre pontos equidistantes vence o primeiro na ordem de entrada
class NaivePointSet(PointSet):

    def __init__(self, points):
        # dict preserva a ordem de inserção e descarta duplicatas
        self.points = list(dict.fromkeys(Point.of(p) for p in points))
        if not self.points:
            raise InvalidArgumentError("NaivePointSet needs at least one point")

    def __len__(self):
        return len(self.points)

    def nearest(self, x, y) -> Point:
        goal = Point(float(x), float(y))
        best = self.points[0]
        best_dist = Point.squared_distance(best, goal)
        for p in self.points[1:]:
            d = Point.squared_distance(p, goal)
            if d < best_dist:
                best, best_dist = p, d
        return best
