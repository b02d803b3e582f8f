# cms_taxonomy/errors.py


class TaxonomyError(Exception):
    """存储层错误基类，统一渲染为 {"error": message}"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaxonomyError):
    """必填字段缺失/为空，或颜色格式错误"""

    status_code = 400


class NotFound(TaxonomyError):
    """路径中的某一级 id 不存在"""

    status_code = 404
