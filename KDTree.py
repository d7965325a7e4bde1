import logging
from enum import Enum

from PointSet import EmptyStructureError, InvalidArgumentError, Point, PointSet

logger = logging.getLogger(__name__)


class Axis(Enum):
    VERTICAL = 0    # compara x
    HORIZONTAL = 1  # compara y

    def flip(self):
        return Axis.HORIZONTAL if self is Axis.VERTICAL else Axis.VERTICAL

    def coordinate(self, point):
        return point.x if self is Axis.VERTICAL else point.y


class KDNode:
    __slots__ = ("point", "axis", "left", "right")
    def __init__(self, point, axis):
        # point: Point(x, y) armazenado no nó
        # axis: eixo de divisão dos descendentes (VERTICAL = x, HORIZONTAL = y)

        self.point = point
        self.axis = axis
        self.left = None
        self.right = None

    def goes_right(self, point):
        # Regra de divisão: >= vai para a direita, < vai para a esquerda
        return self.axis.coordinate(point) >= self.axis.coordinate(self.point)

    def projection(self, point):
        # Projeção ortogonal de point sobre a reta de divisão deste nó
        if self.axis is Axis.VERTICAL:
            return Point(self.point.x, point.y)
        return Point(point.x, self.point.y)


# KD-Tree 2D para busca do vizinho mais próximo
# Os pontos entram na ordem recebida, alternando o eixo a cada nível (raiz em x)
# Não há rebalanceamento e pontos repetidos são ignorados
# Depois de construída é só leitura: nearest() pode ser chamado em paralelo,
# insert() não
class KDTree(PointSet):

    def __init__(self, points):
        self._init_empty()

        points = [Point.of(p) for p in points]
        if not points:
            raise InvalidArgumentError("KDTree needs at least one point")

        for p in points:
            self.insert(p)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "KDTree built from %d points (%d distinct, height %d)",
                len(points), self._size, self.height(),
            )

    @classmethod
    def empty(cls):
        # Árvore vazia para construção incremental via insert()
        tree = cls.__new__(cls)
        tree._init_empty()
        return tree

    def _init_empty(self):
        self.root = None
        self._size = 0

    def __len__(self):
        return self._size

    def __iter__(self):
        # Percorre os pontos em pré-ordem
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node.point
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def __contains__(self, point):
        point = Point.of(point)
        node = self.root
        while node is not None:
            if node.point == point:
                return True
            node = node.right if node.goes_right(point) else node.left
        return False

    def insert(self, point):
        # Insere um ponto seguindo a regra da KD-Tree
        # Retorna True se um novo nó foi criado e False se o ponto já existia

        point = Point.of(point)

        # 1) Árvore vazia: o ponto vira a raiz, dividindo em x
        if self.root is None:
            self.root = KDNode(point, Axis.VERTICAL)
            self._size = 1
            return True

        # 2) Desce pela árvore até achar a posição livre
        node = self.root
        while True:
            if node.point == point:
                return False

            if node.goes_right(point):
                if node.right is None:
                    node.right = KDNode(point, node.axis.flip())
                    break
                node = node.right
            else:
                if node.left is None:
                    node.left = KDNode(point, node.axis.flip())
                    break
                node = node.left

        self._size += 1
        return True

    def height(self):
        if self.root is None:
            return 0
        tallest = 0
        stack = [(self.root, 1)]
        while stack:
            node, depth = stack.pop()
            tallest = max(tallest, depth)
            for child in (node.left, node.right):
                if child is not None:
                    stack.append((child, depth + 1))
        return tallest

    def nearest(self, x, y) -> Point:
        return self.nearest_point(Point(float(x), float(y)))

    def nearest_point(self, goal):
        # Busca do vizinho mais próximo com poda (branch-and-bound)
        # Empates: vence o primeiro ponto encontrado, pois só trocamos o
        # melhor por um ponto estritamente mais próximo

        if self.root is None:
            raise EmptyStructureError("nearest() called on an empty KDTree")

        goal = Point.of(goal)
        best = self.root
        best_dist = Point.squared_distance(best.point, goal)

        # Cada entrada é (nó, False) para visitar o nó, ou (nó, True) para
        # decidir depois se o lado ruim de nó precisa ser visitado
        stack = [(self.root, False)]
        while stack:
            node, check_bad_side = stack.pop()

            if check_bad_side:
                bad_side = node.left if node.goes_right(goal) else node.right
                if bad_side is None:
                    continue

                # Poda: o lado ruim só pode conter algo melhor se a reta de
                # divisão estiver mais perto do que o melhor ponto atual
                bound = Point.squared_distance(node.projection(goal), goal)
                if bound < best_dist:
                    stack.append((bad_side, False))
                continue

            # 1) Atualiza o melhor se este nó for estritamente mais próximo
            d = Point.squared_distance(node.point, goal)
            if d < best_dist:
                best, best_dist = node, d

            # 2) Lado bom primeiro; o lado ruim é testado só depois que toda a
            # subárvore do lado bom tiver sido explorada
            good_side = node.right if node.goes_right(goal) else node.left
            stack.append((node, True))
            if good_side is not None:
                stack.append((good_side, False))

        return best.point


def build_kdtree(points):
    # Constrói a KD-Tree inserindo os pontos na ordem recebida
    # Retorna a KDTree pronta para consultas de vizinho mais próximo

    return KDTree(points)
