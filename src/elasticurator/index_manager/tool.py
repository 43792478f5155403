"""索引管理器核心工具类."""

import logging

from elasticsearch import Elasticsearch
from elasticsearch.exceptions import NotFoundError

from .exceptions import IndexManagerError

logger = logging.getLogger(__name__)


def _validate_index_name(index_name: str) -> bool:
    """验证索引名称是否为单个具体索引.

    Note:
        关闭与删除操作只接受具体索引名：
        - 不能为空，不能以 . 或 _ 开头
        - 不能包含通配符 * ? 以及 , 等多索引分隔符
    """
    if not index_name or not isinstance(index_name, str):
        return False
    if index_name.startswith(".") or index_name.startswith("_"):
        return False
    invalid_chars = {",", "*", "?", "#", "/", "\\", '"', "<", ">", "|", " "}
    return not any(char in invalid_chars for char in index_name)


class IndexManager:
    """索引管理器.

    清理周期中与集群交互的唯一入口，不持有也不修改任何策略对象。

    Args:
        es_client: Elasticsearch 客户端实例
    """

    def __init__(self, es_client: Elasticsearch):
        if es_client is None:
            raise ValueError("es_client 不能为 None")
        self.es_client = es_client
        logger.info("初始化索引管理器")

    def list_index_states(self, pattern: str = "*") -> dict[str, str]:
        """列出索引及其状态.

        以 . 开头的隐藏/系统索引会被排除。

        Args:
            pattern: 索引匹配模式，默认为 "*"

        Returns:
            索引名称到状态（"open" / "close"）的映射

        Raises:
            IndexManagerError: 请求失败时抛出
        """
        try:
            response = self.es_client.cat.indices(
                index=pattern, format="json", h="index,status"
            )
        except NotFoundError:
            logger.warning(f"没有匹配 '{pattern}' 的索引")
            return {}
        except Exception as e:
            raise IndexManagerError(f"列出索引 '{pattern}' 失败: {str(e)}") from e

        states: dict[str, str] = {}
        for cat_info in response:
            index_name = cat_info.get("index", "")
            if not index_name or index_name.startswith("."):
                continue
            states[index_name] = cat_info.get("status", "")
        return states

    def list_index_names(self, pattern: str = "*") -> list[str]:
        """列出索引名称（按名称排序）.

        Example:
            >>> manager = IndexManager(es_client)
            >>> manager.list_index_names("logs-*")
        """
        return sorted(self.list_index_states(pattern))

    def close_index(self, index_name: str) -> bool:
        """关闭索引.

        关闭的索引不接受读写操作，但保留元数据。

        Args:
            index_name: 索引名称（不支持通配符）

        Returns:
            是否成功关闭索引

        Raises:
            ValueError: 索引名称不是单个具体索引时抛出
            IndexManagerError: 请求失败时抛出
        """
        if not _validate_index_name(index_name):
            raise ValueError(f"索引名称 '{index_name}' 不是单个具体索引")

        try:
            response = self.es_client.indices.close(index=index_name)
            if response.get("acknowledged", False):
                logger.info(f"索引 '{index_name}' 已关闭")
                return True
            logger.warning(f"关闭索引 '{index_name}' 未被确认")
            return False
        except NotFoundError:
            logger.warning(f"索引 '{index_name}' 不存在")
            return False
        except Exception as e:
            raise IndexManagerError(f"关闭索引 '{index_name}' 失败: {str(e)}") from e

    def delete_index(self, index_name: str) -> bool:
        """删除索引.

        Args:
            index_name: 索引名称（不支持通配符）

        Returns:
            是否成功删除索引

        Raises:
            ValueError: 索引名称不是单个具体索引时抛出
            IndexManagerError: 请求失败时抛出
        """
        if not _validate_index_name(index_name):
            raise ValueError(f"索引名称 '{index_name}' 不是单个具体索引")

        try:
            response = self.es_client.indices.delete(index=index_name)
            if response.get("acknowledged", False):
                logger.info(f"索引 '{index_name}' 删除成功")
                return True
            logger.warning(f"删除索引 '{index_name}' 未被确认")
            return False
        except NotFoundError:
            logger.warning(f"索引 '{index_name}' 不存在")
            return False
        except Exception as e:
            raise IndexManagerError(f"删除索引 '{index_name}' 失败: {str(e)}") from e
