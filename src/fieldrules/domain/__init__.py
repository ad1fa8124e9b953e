"""Pure validation logic: rules, the rule catalog, record walking, the registry."""
