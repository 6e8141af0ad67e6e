from querystore import QueryStore, Query

query = Query({'test': '://$#!1', 'test2&': [1, 2]})
q2 = Query(str(query)).to_dict()

qs = QueryStore("?page=5&option=apple&option=banana&option=melon")
print(qs.get_value("option"))
print(qs.get_values("option"))
print(qs.get_value_as("page", int))

qs.add("option", "kiwi")
qs.add_or_replace("page", 6)
qs.add_or_replace("empty", "")
print(qs.to_query_string(remove_empty=True))
print(qs.to_query_string(expand=True))

from_uri = QueryStore.from_uri("http://dl.rockylinux.org/pub?arch=x86_64&arch=aarch64")
print(from_uri.get_values_with("arch", str.upper))
print(from_uri.to_dict())
