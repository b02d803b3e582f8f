# cms_taxonomy/client/controller.py
"""
标签管理界面的客户端状态

- TaxonomyApi：封装 HTTP 接口，非 2xx 响应抛出 TaxonomyClientError
- TaxonomyCache：最近一次服务端返回的数据，每次写操作成功后按子树整体替换
- ListState：每一级列表的 新建 / 编辑 / 展开 状态
- TaxonomyController：协调以上三者；不做乐观更新，请求失败时本地状态保持不变
"""
from typing import Any, Callable, List, Optional, Tuple, Union

import httpx

from cms_taxonomy.logger import get_logger
from cms_taxonomy.schemas.taxonomy import ProjectType, TagType
from cms_taxonomy.service.color import DEFAULT_TAG_TYPE_COLOR, effective_color, get_contrast_color

logger = get_logger(__name__)


class TaxonomyClientError(Exception):
    def __init__(self, status_code: Optional[int], message: str):
        super().__init__(f"{status_code}: {message}" if status_code else message)
        self.status_code = status_code
        self.message = message


class TaxonomyApi:
    """client 可以是任意 httpx.Client（包括 FastAPI 的 TestClient）"""

    def __init__(self, client: httpx.Client, prefix: str = ""):
        self.client = client
        self.prefix = prefix.rstrip("/")

    def _request(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        try:
            response = self.client.request(method, self.prefix + path, json=json)
        except httpx.RequestError as e:
            raise TaxonomyClientError(None, f"Request failed: {e}") from e

        if response.is_error:
            try:
                message = response.json().get("error") or response.reason_phrase
            except (ValueError, AttributeError):
                message = response.text or response.reason_phrase
            raise TaxonomyClientError(response.status_code, message)
        return response.json()

    @staticmethod
    def _tag_type_path(tag_type_id: str, project_type_id: Optional[str] = None) -> str:
        if project_type_id:
            return f"/project-types/{project_type_id}/tag-types/{tag_type_id}"
        return f"/tag-types/{tag_type_id}"

    # 项目类型
    def list_project_types(self) -> List[ProjectType]:
        return [ProjectType.model_validate(item) for item in self._request("GET", "/project-types")]

    def create_project_type(self, name: str) -> ProjectType:
        return ProjectType.model_validate(self._request("POST", "/project-types", {"name": name}))

    def update_project_type(self, project_type_id: str, name: str) -> ProjectType:
        data = self._request("PUT", f"/project-types/{project_type_id}", {"name": name})
        return ProjectType.model_validate(data)

    def delete_project_type(self, project_type_id: str) -> None:
        self._request("DELETE", f"/project-types/{project_type_id}")

    # 标签类型
    def list_tag_types(self, project_type_id: Optional[str] = None) -> List[TagType]:
        path = f"/project-types/{project_type_id}/tag-types" if project_type_id else "/tag-types"
        return [TagType.model_validate(item) for item in self._request("GET", path)]

    def create_tag_type(self, name: str, color: str, project_type_id: Optional[str] = None) -> TagType:
        path = f"/project-types/{project_type_id}/tag-types" if project_type_id else "/tag-types"
        return TagType.model_validate(self._request("POST", path, {"name": name, "color": color}))

    def update_tag_type(
        self, tag_type_id: str, name: str, color: str, project_type_id: Optional[str] = None
    ) -> TagType:
        path = self._tag_type_path(tag_type_id, project_type_id)
        return TagType.model_validate(self._request("PUT", path, {"name": name, "color": color}))

    def delete_tag_type(self, tag_type_id: str, project_type_id: Optional[str] = None) -> None:
        self._request("DELETE", self._tag_type_path(tag_type_id, project_type_id))

    # 标签：返回完整的父级标签类型
    def create_tag(self, tag_type_id: str, name: str, color: Optional[str] = None) -> TagType:
        data = self._request("POST", f"/tag-types/{tag_type_id}/tags", {"name": name, "color": color})
        return TagType.model_validate(data)

    def update_tag(self, tag_type_id: str, tag_id: str, name: str, color: Optional[str] = None) -> TagType:
        data = self._request(
            "PUT", f"/tag-types/{tag_type_id}/tags/{tag_id}", {"name": name, "color": color}
        )
        return TagType.model_validate(data)

    def delete_tag(self, tag_type_id: str, tag_id: str) -> TagType:
        return TagType.model_validate(self._request("DELETE", f"/tag-types/{tag_type_id}/tags/{tag_id}"))


class TaxonomyCache:
    def __init__(self):
        self.project_types: List[ProjectType] = []
        # 不属于任何项目类型的标签类型
        self.global_tag_types: List[TagType] = []

    def load(self, project_types: List[ProjectType], global_tag_types: Optional[List[TagType]] = None) -> None:
        self.project_types = list(project_types)
        if global_tag_types is not None:
            self.global_tag_types = list(global_tag_types)

    def project_type(self, project_type_id: Optional[str]) -> Optional[ProjectType]:
        return next((pt for pt in self.project_types if pt.id == project_type_id), None)

    def tag_type(self, tag_type_id: Optional[str]) -> Optional[TagType]:
        for tag_type in self._all_tag_types():
            if tag_type.id == tag_type_id:
                return tag_type
        return None

    def _all_tag_types(self):
        for project_type in self.project_types:
            yield from project_type.tag_types
        yield from self.global_tag_types

    def _siblings(self, tag_type: TagType) -> List[TagType]:
        parent = self.project_type(tag_type.project_type_id)
        return parent.tag_types if parent else self.global_tag_types

    def replace(self, subtree: Union[ProjectType, TagType]) -> None:
        """用服务端返回的子树整体替换本地副本，不存在则追加"""
        if isinstance(subtree, ProjectType):
            items = self.project_types
        elif isinstance(subtree, TagType):
            items = self._siblings(subtree)
        else:
            raise TypeError(f"Cannot cache {type(subtree).__name__}")

        for index, item in enumerate(items):
            if item.id == subtree.id:
                items[index] = subtree
                return
        items.append(subtree)

    def remove_project_type(self, project_type_id: str) -> None:
        self.project_types = [pt for pt in self.project_types if pt.id != project_type_id]

    def remove_tag_type(self, tag_type_id: str) -> None:
        for project_type in self.project_types:
            project_type.tag_types = [tt for tt in project_type.tag_types if tt.id != tag_type_id]
        self.global_tag_types = [tt for tt in self.global_tag_types if tt.id != tag_type_id]


class ListState:
    """
    单个列表的界面状态

    新建/编辑共用同一个表单（name/color），同一时刻只能有一行处于编辑；
    展开（selected_id）与编辑互相独立，但正在编辑的行点击不会切换展开
    """

    def __init__(self, default_color: Optional[str] = None):
        self.default_color = default_color
        self.creating = False
        self.editing_id: Optional[str] = None
        self.selected_id: Optional[str] = None
        self.name = ""
        self.color = default_color
        self.is_submitting = False

    @property
    def mode(self) -> str:
        if self.creating:
            return "creating"
        if self.editing_id is not None:
            return "editing"
        return "idle"

    def _reset_form(self) -> None:
        self.name = ""
        self.color = self.default_color

    def start_create(self) -> None:
        self.editing_id = None
        self._reset_form()
        self.creating = True

    def cancel_create(self) -> None:
        self.creating = False
        self._reset_form()

    def start_edit(self, entity: Any) -> None:
        self.creating = False
        self.editing_id = entity.id
        self.name = entity.name
        self.color = getattr(entity, "color", None) or self.default_color

    def cancel_edit(self) -> None:
        self.editing_id = None
        self._reset_form()

    def toggle_select(self, entity_id: str) -> bool:
        """手风琴式展开；返回 False 表示点击被忽略（该行正在编辑）"""
        if entity_id == self.editing_id:
            return False
        self.selected_id = None if self.selected_id == entity_id else entity_id
        return True

    def forget(self, entity_id: str) -> None:
        """实体被删除后清理与其相关的状态"""
        if self.selected_id == entity_id:
            self.selected_id = None
        if self.editing_id == entity_id:
            self.cancel_edit()

    def reset(self) -> None:
        self.creating = False
        self.editing_id = None
        self.selected_id = None
        self.is_submitting = False
        self._reset_form()


_FAILED = object()


class TaxonomyController:
    def __init__(self, api: TaxonomyApi, cache: Optional[TaxonomyCache] = None):
        self.api = api
        self.cache = cache or TaxonomyCache()
        self.project_types = ListState()
        self.tag_types = ListState(default_color=DEFAULT_TAG_TYPE_COLOR)
        self.tags = ListState(default_color="")
        self.last_error: Optional[TaxonomyClientError] = None

    @property
    def selected_project_type(self) -> Optional[ProjectType]:
        return self.cache.project_type(self.project_types.selected_id)

    @property
    def selected_tag_type(self) -> Optional[TagType]:
        return self.cache.tag_type(self.tag_types.selected_id)

    def _call(self, action: str, state: Optional[ListState], func: Callable, *args):
        """失败时记录日志并保留本地状态，返回 _FAILED"""
        if state is not None:
            state.is_submitting = True
        try:
            result = func(*args)
        except TaxonomyClientError as e:
            logger.error("Error %s: %s", action, e)
            self.last_error = e
            return _FAILED
        finally:
            if state is not None:
                state.is_submitting = False
        self.last_error = None
        return result

    def refresh(self) -> bool:
        project_types = self._call("fetching project types", None, self.api.list_project_types)
        if project_types is _FAILED:
            return False

        tag_types = self._call("fetching tag types", None, self.api.list_tag_types)
        if tag_types is _FAILED:
            return False

        # 全局标签类型不挂在任何项目类型下，单独缓存
        self.cache.load(project_types, [tt for tt in tag_types if tt.project_type_id is None])
        # 默认选中第一个项目类型
        if self.selected_project_type is None:
            self.project_types.selected_id = project_types[0].id if project_types else None
        if self.tag_types.selected_id is not None and self.selected_tag_type is None:
            # 选中的标签类型已在服务端删除
            self.tag_types.selected_id = None
            self.tags.reset()
        return True

    def select_project_type(self, project_type_id: str) -> bool:
        if not self.project_types.toggle_select(project_type_id):
            return False
        self.tag_types.reset()
        self.tags.reset()
        return True

    def select_tag_type(self, tag_type_id: str) -> bool:
        if not self.tag_types.toggle_select(tag_type_id):
            return False
        self.tags.reset()
        return True

    # 项目类型
    def create_project_type(self) -> Optional[ProjectType]:
        state = self.project_types
        if not state.name.strip():
            return None

        project_type = self._call("creating project type", state, self.api.create_project_type, state.name)
        if project_type is _FAILED:
            return None

        self.cache.replace(project_type)
        state.cancel_create()
        # 新建后自动选中
        state.selected_id = project_type.id
        self.tag_types.reset()
        self.tags.reset()
        return project_type

    def update_project_type(self, project_type_id: str) -> Optional[ProjectType]:
        state = self.project_types
        if not state.name.strip():
            return None

        project_type = self._call(
            "updating project type", state, self.api.update_project_type, project_type_id, state.name
        )
        if project_type is _FAILED:
            return None

        self.cache.replace(project_type)
        state.cancel_edit()
        return project_type

    def delete_project_type(self, project_type_id: str) -> bool:
        state = self.project_types
        deleted_tag_type_ids = {
            tt.id for tt in getattr(self.cache.project_type(project_type_id), "tag_types", [])
        }
        if self._call("deleting project type", None, self.api.delete_project_type, project_type_id) is _FAILED:
            return False

        was_selected = state.selected_id == project_type_id
        self.cache.remove_project_type(project_type_id)
        state.forget(project_type_id)
        if was_selected:
            # 删除当前选中项后，自动选中剩余的第一个
            state.selected_id = self.cache.project_types[0].id if self.cache.project_types else None
            self.tag_types.reset()
            self.tags.reset()
        elif self.tag_types.selected_id in deleted_tag_type_ids:
            self.tag_types.reset()
            self.tags.reset()
        return True

    # 标签类型
    def create_tag_type(self, project_type_id: Optional[str] = None) -> Optional[TagType]:
        state = self.tag_types
        if not state.name.strip():
            return None

        project_type_id = project_type_id or self.project_types.selected_id
        tag_type = self._call(
            "creating tag type", state, self.api.create_tag_type, state.name, state.color, project_type_id
        )
        if tag_type is _FAILED:
            return None

        self.cache.replace(tag_type)
        state.cancel_create()
        return tag_type

    def update_tag_type(self, tag_type_id: str) -> Optional[TagType]:
        state = self.tag_types
        if not state.name.strip():
            return None

        current = self.cache.tag_type(tag_type_id)
        project_type_id = current.project_type_id if current else None
        tag_type = self._call(
            "updating tag type",
            state,
            self.api.update_tag_type,
            tag_type_id,
            state.name,
            state.color,
            project_type_id,
        )
        if tag_type is _FAILED:
            return None

        self.cache.replace(tag_type)
        state.cancel_edit()
        return tag_type

    def delete_tag_type(self, tag_type_id: str) -> bool:
        state = self.tag_types
        current = self.cache.tag_type(tag_type_id)
        project_type_id = current.project_type_id if current else None
        if self._call("deleting tag type", None, self.api.delete_tag_type, tag_type_id, project_type_id) is _FAILED:
            return False

        was_selected = state.selected_id == tag_type_id
        self.cache.remove_tag_type(tag_type_id)
        state.forget(tag_type_id)
        if was_selected:
            # 不再显示已删除标签类型下的标签
            self.tags.reset()
        return True

    # 标签
    def create_tag(self, tag_type_id: Optional[str] = None) -> Optional[TagType]:
        state = self.tags
        tag_type_id = tag_type_id or self.tag_types.selected_id
        if not state.name.strip() or tag_type_id is None:
            return None

        tag_type = self._call(
            "creating tag", state, self.api.create_tag, tag_type_id, state.name, state.color or None
        )
        if tag_type is _FAILED:
            return None

        self.cache.replace(tag_type)
        state.cancel_create()
        return tag_type

    def update_tag(self, tag_id: str, tag_type_id: Optional[str] = None) -> Optional[TagType]:
        state = self.tags
        tag_type_id = tag_type_id or self.tag_types.selected_id
        if not state.name.strip() or tag_type_id is None:
            return None

        tag_type = self._call(
            "updating tag", state, self.api.update_tag, tag_type_id, tag_id, state.name, state.color or None
        )
        if tag_type is _FAILED:
            return None

        self.cache.replace(tag_type)
        state.cancel_edit()
        return tag_type

    def delete_tag(self, tag_id: str, tag_type_id: Optional[str] = None) -> Optional[TagType]:
        tag_type_id = tag_type_id or self.tag_types.selected_id
        if tag_type_id is None:
            return None

        tag_type = self._call("deleting tag", None, self.api.delete_tag, tag_type_id, tag_id)
        if tag_type is _FAILED:
            return None

        self.cache.replace(tag_type)
        self.tags.forget(tag_id)
        return tag_type

    def badge(self, tag: Any, tag_type: Any) -> Tuple[str, str]:
        """标签徽章的 (背景色, 文字颜色)"""
        background = effective_color(tag, tag_type)
        return background, get_contrast_color(background)
