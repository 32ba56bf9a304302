# Messages

# SUCCESS
SUCCESS_SIGN_IN = "Login successful"
SUCCESS_SIGN_UP = "User registered successfully"
SUCCESS_UPDATE_PROFILE = "Profile updated successfully"
SUCCESS_CHANGE_PASSWORD = "Password changed successfully"
SUCCESS_DELETE_USER = "User deleted successfully"
SUCCESS_CREATE_RECIPE = "Recipe created successfully"
SUCCESS_UPDATE_RECIPE = "Recipe updated successfully"
SUCCESS_DELETE_RECIPE = "Recipe deleted successfully"
SUCCESS_ADD_PLANNER_ENTRY = "Recipe added to planner"
SUCCESS_UPDATE_PLANNER_ENTRY = "Planner entry updated"
SUCCESS_DELETE_PLANNER_ENTRY = "Recipe removed from planner"
SUCCESS_ADD_FAVORITE = "Recipe added to favorites"
SUCCESS_DELETE_FAVORITE = "Recipe removed from favorites"

# INFO
INFO_NO_WEEKLY_PLAN = "No weekly plan for this week"
INFO_EMPTY_WEEKLY_PLAN = "No recipes in weekly plan"

# FAIL
FAIL_AUTH_CHECK = "Authentication required."
FAIL_INVALID_TOKEN = "Invalid token."
FAIL_AUTH_VALIDATION_CREDENTIAL = "Invalid credentials"
FAIL_ACCESS_DENIED = "Access denied"
FAIL_ADMIN_REQUIRED = "Access denied: Requires Admin privileges"
FAIL_ADMIN_CREATE_RECIPE = "Access denied. Only admins can create recipes."
FAIL_USER_ALREADY_EXISTS = "User already exists"
FAIL_EMAIL_IN_USE = "Email already in use"
FAIL_WRONG_PASSWORD = "Current password is incorrect"
FAIL_SELF_DELETE = "Cannot delete your own admin account"
FAIL_ALREADY_FAVORITE = "Recipe already in favorites"
FAIL_VALIDATION_MATCHED_USER_ID = "User not found"
FAIL_VALIDATION_MATCHED_RECIPE = "Recipe not found"
FAIL_VALIDATION_MATCHED_INGREDIENT = "Ingredient not found"
FAIL_VALIDATION_MATCHED_PLANNER_ENTRY = "Planner entry not found"
FAIL_VALIDATION_MATCHED_FAVORITE = "Favorite not found"
FAIL_INTERNAL = "Internal server error"
