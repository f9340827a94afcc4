from tracked import computed, effect, reactive

a = reactive({"foo": 5, "nested": {"title": "tom"}})


@effect
def log_foo():
    print(f"foo is {a['foo']}")


a["foo"] = 6


@computed
def my_computed_property():
    print("running")
    return 5 * a["foo"]


assert my_computed_property.value == 30

a["foo"] = 7
assert my_computed_property.value == 35

effect(lambda: print(f"title is {a['nested']['title']}"))
a["nested"]["title"] = "jerry"
