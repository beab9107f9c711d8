"""
记录查询描述测试
"""
from core.records.query import (
    Condition, FilterOperator, OrderBy, QueryParams, SortType, SubGroup, WhereGroup,
)


class TestCondition:

    def test_to_where_uses_capitalised_keys(self):
        condition = Condition("status_c", FilterOperator.EQUAL_TO, ["Available"])
        assert condition.to_where() == {
            "FieldName": "status_c",
            "Operator": "EqualTo",
            "Values": ["Available"],
        }

    def test_to_group_condition_uses_camel_keys(self):
        condition = Condition("guest_name_c", FilterOperator.CONTAINS, ["smith"])
        assert condition.to_group_condition() == {
            "fieldName": "guest_name_c",
            "operator": "Contains",
            "values": ["smith"],
        }

    def test_from_dict_accepts_both_key_styles(self):
        a = Condition.from_dict({"FieldName": "floor_c", "Operator": "GreaterThan", "Values": [2]})
        b = Condition.from_dict({"fieldName": "floor_c", "operator": "GreaterThan", "values": [2]})
        assert a == b
        assert a.operator is FilterOperator.GREATER_THAN


class TestWhereGroup:

    def test_any_of_puts_each_condition_in_its_own_sub_group(self):
        group = WhereGroup.any_of(
            Condition("room_number_c", FilterOperator.CONTAINS, ["10"]),
            Condition("guest_name_c", FilterOperator.CONTAINS, ["10"]),
        )
        rendered = group.to_dict()

        assert rendered["operator"] == "OR"
        assert len(rendered["subGroups"]) == 2
        assert rendered["subGroups"][0] == {
            "conditions": [{"fieldName": "room_number_c", "operator": "Contains", "values": ["10"]}],
            "operator": "",
        }

    def test_from_dict_defaults_operator(self):
        group = WhereGroup.from_dict({"subGroups": [{"conditions": []}]})
        assert group.operator == "OR"
        assert group.sub_groups == [SubGroup()]


class TestQueryParams:

    def test_to_params_omits_empty_sections(self):
        params = QueryParams(fields=["Id", "status_c"]).to_params()
        assert params == {"fields": [{"field": {"Name": "Id"}}, {"field": {"Name": "status_c"}}]}

    def test_to_params_renders_paging_and_order(self):
        params = QueryParams(
            fields=["Id"],
            order_by=[OrderBy("check_in_date_c", SortType.DESC)],
            limit=100,
        ).to_params()

        assert params["orderBy"] == [{"fieldName": "check_in_date_c", "sorttype": "DESC"}]
        assert params["pagingInfo"] == {"limit": 100, "offset": 0}

    def test_from_params_parses_wire_descriptor(self):
        wire = {
            "fields": [{"field": {"Name": "Id"}}, {"field": {"Name": "status_c"}}],
            "where": [{"FieldName": "category_c", "Operator": "NotEqualTo", "Values": ["housekeeping"]}],
            "whereGroups": [{
                "operator": "OR",
                "subGroups": [{"conditions": [
                    {"fieldName": "status_c", "operator": "EqualTo", "values": ["open"]}
                ], "operator": ""}],
            }],
            "orderBy": [{"fieldName": "created_at_c", "sorttype": "desc"}],
            "pagingInfo": {"limit": 20, "offset": 40},
        }
        query = QueryParams.from_params(wire)

        assert query.fields == ["Id", "status_c"]
        assert query.where[0].operator is FilterOperator.NOT_EQUAL_TO
        assert query.where_groups[0].sub_groups[0].conditions[0].values == ["open"]
        assert query.order_by[0].sort_type is SortType.DESC
        assert (query.limit, query.offset) == (20, 40)

    def test_from_params_none(self):
        query = QueryParams.from_params(None)
        assert query.fields == []
        assert query.limit is None
